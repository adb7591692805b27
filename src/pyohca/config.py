"""Engine configuration for pyohca."""

from __future__ import annotations

import dataclasses
import enum
import os
from datetime import date
from typing import Any

from pyohca._constants import ROLLOVER_THRESHOLD_SECONDS, ROSC_TOLERANCE_MS
from pyohca.exceptions import OhcaConfigError


class MissingOffsetPolicy(enum.StrEnum):
    """How the resolver treats a winning observer without a calibration pair."""

    ZERO = "zero"
    """Correct with a zero offset (matches the paper form workflow)."""

    REJECT = "reject"
    """Observer 1 stays uncorrected; observers 2/3 resolve to ``None``."""


def _parse_policy(value: str) -> MissingOffsetPolicy:
    try:
        return MissingOffsetPolicy(value.strip().lower())
    except ValueError as err:
        choices = ", ".join(p.value for p in MissingOffsetPolicy)
        raise OhcaConfigError(f"missing offset policy must be one of {choices}, got {value!r}") from err


def _parse_number(name: str, value: str, kind: type[int] | type[float]) -> Any:
    try:
        return kind(value)
    except ValueError as err:
        raise OhcaConfigError(f"{name} must be a number, got {value!r}") from err


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as err:
        raise OhcaConfigError(f"anchor date must be YYYY-MM-DD, got {value!r}") from err


@dataclasses.dataclass(frozen=True)
class EngineConfig:
    """Engine configuration.

    Parameters
    ----------
    missing_offset_policy : MissingOffsetPolicy
        Behaviour when the observer whose reading wins resolution has no
        complete calibration pair.  Defaults to ``ZERO``.
    rosc_tolerance_ms : int
        ROSC is considered equal to AED-off when the two instants are
        strictly closer than this many milliseconds.
    rollover_threshold_s : int
        Durations more negative than ``-rollover_threshold_s`` seconds get
        one day added (unflagged midnight crossing).
    anchor_date : date or None
        Date used for bare ``HH:MM:SS`` readings when the case record has
        no incident date.  ``None`` falls back to 1970-01-01.
    """

    missing_offset_policy: MissingOffsetPolicy = MissingOffsetPolicy.ZERO
    rosc_tolerance_ms: int = ROSC_TOLERANCE_MS
    rollover_threshold_s: int = ROLLOVER_THRESHOLD_SECONDS
    anchor_date: date | None = None

    def __post_init__(self) -> None:
        if self.rosc_tolerance_ms < 0:
            raise OhcaConfigError(f"rosc_tolerance_ms must be >= 0, got {self.rosc_tolerance_ms}")
        if self.rollover_threshold_s <= 0:
            raise OhcaConfigError(f"rollover_threshold_s must be > 0, got {self.rollover_threshold_s}")

    @classmethod
    def from_env(cls, **overrides: Any) -> EngineConfig:
        """Create configuration from ``OHCA_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        OhcaConfigError
            If an environment value cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        policy_env = env.get("OHCA_MISSING_OFFSET_POLICY")
        if policy_env is not None and "missing_offset_policy" not in overrides:
            config_kwargs["missing_offset_policy"] = _parse_policy(policy_env)

        tolerance_env = env.get("OHCA_ROSC_TOLERANCE_MS")
        if tolerance_env is not None and "rosc_tolerance_ms" not in overrides:
            config_kwargs["rosc_tolerance_ms"] = _parse_number("OHCA_ROSC_TOLERANCE_MS", tolerance_env, int)

        threshold_env = env.get("OHCA_ROLLOVER_THRESHOLD_S")
        if threshold_env is not None and "rollover_threshold_s" not in overrides:
            config_kwargs["rollover_threshold_s"] = _parse_number("OHCA_ROLLOVER_THRESHOLD_S", threshold_env, int)

        anchor_env = env.get("OHCA_ANCHOR_DATE")
        if anchor_env and "anchor_date" not in overrides:
            config_kwargs["anchor_date"] = _parse_date(anchor_env)

        policy_override = overrides.get("missing_offset_policy")
        if isinstance(policy_override, str) and not isinstance(policy_override, MissingOffsetPolicy):
            overrides["missing_offset_policy"] = _parse_policy(policy_override)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
