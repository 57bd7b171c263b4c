"""Errors raised for invalid planning inputs."""

from __future__ import annotations


class InvalidConfigurationError(ValueError):
    """Policy settings that cannot produce a terminating, consistent plan."""


class PeriodOutOfRangeError(IndexError):
    """A period index outside the demand horizon."""
