"""Note domain rules: content validation, enumerations, query building."""
