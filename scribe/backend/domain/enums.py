"""
Note Enumerations.

Mood and progress value sets, including the retired English mood names
that older records may still carry.
"""

from enum import Enum


class Mood(str, Enum):
    """Canonical mood values."""

    FELIZ = "feliz"
    NEUTRO = "neutro"
    TRISTE = "triste"
    ANIMADO = "animado"
    DEBOA = "deboa"

    @classmethod
    def parse(cls, value: object) -> "Mood | None":
        """
        Resolve a canonical value or retired alias to a Mood.

        Returns None for anything unrecognized.
        """
        if isinstance(value, Mood):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        if key in MOOD_BY_ALIAS:
            return MOOD_BY_ALIAS[key]
        try:
            return cls(key)
        except ValueError:
            return None


DEFAULT_MOOD = Mood.NEUTRO

# Retired English names, one per canonical value
LEGACY_MOOD_ALIASES: dict[Mood, str] = {
    Mood.FELIZ: "happy",
    Mood.NEUTRO: "neutral",
    Mood.TRISTE: "sad",
    Mood.ANIMADO: "excited",
    Mood.DEBOA: "calm",
}

MOOD_BY_ALIAS: dict[str, Mood] = {alias: mood for mood, alias in LEGACY_MOOD_ALIASES.items()}


def mood_aliases(value: str) -> tuple[str, ...]:
    """
    Stored values equivalent to the requested mood.

    A canonical value or its alias yields (canonical, alias); anything
    else is passed through unchanged.
    """
    mood = Mood.parse(value)
    if mood is None:
        return (value,)
    return (mood.value, LEGACY_MOOD_ALIASES[mood])


PROGRESS_VALUES: tuple[int, ...] = (0, 25, 50, 75, 100)
DEFAULT_PROGRESS = 0

PROGRESS_LABELS: dict[int, str] = {
    0: "Open",
    25: "Started",
    50: "In progress",
    75: "Finishing",
    100: "Done",
}


def is_valid_progress(value: object) -> bool:
    # bool is an int subclass; True must not pass as 1
    return isinstance(value, int) and not isinstance(value, bool) and value in PROGRESS_VALUES


def progress_label(value: object) -> str:
    if is_valid_progress(value):
        return PROGRESS_LABELS[value]
    return PROGRESS_LABELS[DEFAULT_PROGRESS]
