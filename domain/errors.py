# -*- coding: utf-8 -*-


class DrillConfigError(ValueError):
    """Base for configuration problems detected before a run starts."""


class InvalidRange(DrillConfigError):
    """A configured (min, max) pair has min > max."""


class DegenerateDistribution(DrillConfigError):
    """A weight group sums to zero (or holds a negative weight)."""


class InvalidTarget(DrillConfigError):
    """A shot was requested for a target number outside the court grid."""


class InvalidConfiguration(DrillConfigError):
    """Non-positive durations, rep targets or shuttle numbers."""


class SettingsFormError(ValueError):
    """Human-entered settings that cannot be saved."""
