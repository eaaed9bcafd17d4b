"""Custom exceptions for chord-chart."""

from __future__ import annotations

from collections.abc import Iterable


class ChordChartError(Exception):
    """Base exception for chord-chart."""


class ConfigError(ChordChartError):
    """Invalid configuration value."""


class ChartValidationError(ChordChartError):
    """Raised when one or more chart lines fail validation.

    All offending lines are collected before this is raised, so a single
    failed import reports every problem at once.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors = tuple(errors)
        super().__init__("Chart validation failed:\n" + "\n".join(self.errors))


class LineNotFoundError(ChordChartError):
    """Raised when a lyric line does not exist for the given song."""

    def __init__(self, song_id: int, line_id: int):
        self.song_id = song_id
        self.line_id = line_id
        super().__init__(f"Lyric line {line_id} not found for song {song_id}")


class MalformedTokenError(ChordChartError):
    """Raised when a chord-shaped token fails semantic validation."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Malformed chord token: {token!r}")


class EmptyChartError(ChordChartError):
    """Raised when a chart holds no lyric text to work with."""


class PositionConflictError(ChordChartError):
    """Raised when a reorder would give two lyric lines the same position."""

    def __init__(self, song_id: int, positions: Iterable[int]):
        self.song_id = song_id
        self.positions = tuple(sorted(positions))
        joined = ", ".join(str(position) for position in self.positions)
        super().__init__(f"Reorder of song {song_id} reuses position(s): {joined}")
