"""Custom exception hierarchy for pyohca."""

from __future__ import annotations


class OhcaError(Exception):
    """Base exception for all pyohca errors."""


class OhcaConfigError(OhcaError):
    """Invalid or missing configuration."""


class OhcaSnapshotError(OhcaError):
    """Case snapshot does not match the expected record structure.

    Raised only at the load boundary.  Individual unparsable or missing
    timestamps never raise; they resolve to ``None`` inside the engine.
    """

    def __init__(self, message: str, *, errors: list[dict] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)
