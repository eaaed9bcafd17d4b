"""Configuration settings for chord-chart."""

import os

from .exceptions import ConfigError

# Chord slots above a lyric line (1 = start ... 5 = end)
SLOT_COUNT = 5

# Percentage boundaries between slots 1|2, 2|3, 3|4 and 4|5
SLOT_BOUNDARIES = (15, 35, 55, 75)

# Line classification
SHORT_LINE_MAX_WORDS = 6
CHORD_LINE_THRESHOLD = 0.5

# Section assumed until the first label is seen (verse)
DEFAULT_STRUCTURE_ID = 2

# Overridable via environment variables
MAX_CHORDS_PER_LINE = int(os.getenv("CHORD_CHART_MAX_CHORDS", str(SLOT_COUNT)))
PLACEMENT_STRATEGY = os.getenv("CHORD_CHART_PLACEMENT", "redistribute")
LOG_LEVEL = os.getenv("CHORD_CHART_LOG_LEVEL", "WARNING")

PLACEMENT_CHOICES = ("redistribute", "optimize")
LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_config() -> None:
    """Validate configuration values."""
    if not (1 <= MAX_CHORDS_PER_LINE <= SLOT_COUNT):
        raise ConfigError(f"Max chords per line must be between 1 and {SLOT_COUNT}")

    if PLACEMENT_STRATEGY not in PLACEMENT_CHOICES:
        raise ConfigError(f"Unknown placement strategy: {PLACEMENT_STRATEGY}")

    if LOG_LEVEL.upper() not in LOG_LEVEL_CHOICES:
        raise ConfigError(f"Invalid log level: {LOG_LEVEL}")


# Validate config on import
validate_config()
