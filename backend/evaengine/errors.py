"""Exception types raised for structurally invalid engine inputs.

Numerically degenerate inputs (zero humidity, empty months, short histories)
never raise; they return a defined default instead.
"""

from __future__ import annotations


class EvaMapError(ValueError):
    """Base class for all engine input errors."""


class InvalidMonthKeyError(EvaMapError):
    """A month key string or (year, month) pair could not be interpreted."""


class InvalidRegionError(EvaMapError):
    """A region record is missing a mandatory field or holds an invalid one."""


class WeatherPayloadError(EvaMapError):
    """An upstream weather payload does not have the expected shape."""


class GenerationPayloadError(EvaMapError):
    """An upstream generation payload does not have the expected shape."""


class ClimateHistoryError(EvaMapError):
    """A climate history long enough to project leaves calendar months uncovered."""
