"""Exception types raised by the team formation library."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid run configuration (empty pool, bad team size, duplicate ids)."""


class AttributeUpdateError(ValueError):
    """A participant edit was rejected before any field was changed."""


class ParticipantParseError(ValueError):
    """A raw input row could not be turned into a participant."""

    def __init__(self, message: str, raw_row: str):
        super().__init__(f"{message}: {raw_row}")
        self.raw_row = raw_row


class ParallelTaskFailure(RuntimeError):
    """One or more worker tasks failed or timed out.

    ``causes`` maps the chunk index to the exception that chunk raised.
    """

    def __init__(self, message: str, causes: dict[int, BaseException] | None = None):
        super().__init__(message)
        self.causes: dict[int, BaseException] = dict(causes or {})
