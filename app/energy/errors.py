"""Error taxonomy for the energy kernel.

Only ProfileMissing reaches callers. Subsystem failures and thin data are
recorded as diagnostics next to a best-effort result.
"""

from __future__ import annotations


class EnergyError(Exception):
    """Base class for kernel errors."""


class ProfileMissing(EnergyError):
    """No birth data available for the requested computation."""

    def __init__(self, message: str = "No birth data available for this user"):
        super().__init__(message)


class SubsystemComputationFailure(EnergyError):
    """A single subsystem scorer raised; the aggregator continues without it."""

    def __init__(self, subsystem: str, cause: BaseException):
        self.subsystem = subsystem
        self.cause = cause
        super().__init__(f"{subsystem} failed: {cause}")


class ClampViolation(AssertionError):
    """A score left [0, 100]. Programming error, never handled."""


# Diagnostic kinds (see models.Diagnostic)
SUBSYSTEM_FAILURE = "subsystem_failure"
INSUFFICIENT_DATA = "insufficient_data"


def check_bounds(score: float, name: str = "score") -> float:
    if not 0 <= score <= 100:
        raise ClampViolation(f"{name}={score} outside [0, 100]")
    return score
