"""Error taxonomy for the decision core."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Malformed snapshot or configuration value."""


class PreconditionViolation(ValueError):
    """A query the caller should never have made (out of bounds, disabled cell, missing token)."""


class ParseError(ValueError):
    """Decision-service reply without a usable coordinate pair."""


__all__ = ["ConfigurationError", "PreconditionViolation", "ParseError"]
