"""Backend application: API, services, repositories, models."""
