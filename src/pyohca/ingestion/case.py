"""Case record ingestion."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pyohca._redact import redact_for_log
from pyohca.config import EngineConfig
from pyohca.exceptions import OhcaSnapshotError
from pyohca.ingestion.normalize import parse_date
from pyohca.models._base import ANCHOR_DATE_KEY
from pyohca.models.case import CaseSnapshot

_logger = logging.getLogger(__name__)


def load_case(raw: Mapping[str, Any], config: EngineConfig | None = None) -> CaseSnapshot:
    """Parse the host's raw case record into a :class:`CaseSnapshot`.

    Bare ``HH:MM:SS`` readings are placed on the incident date from
    ``basicInfo.date``, falling back to ``config.anchor_date``.

    Raises
    ------
    OhcaSnapshotError
        If *raw* is not a mapping or its sections have the wrong shape.
        Individual unusable timestamps do not raise.
    """
    if isinstance(raw, CaseSnapshot):
        return raw
    if not isinstance(raw, Mapping):
        raise OhcaSnapshotError(f"case record must be a mapping, got {type(raw).__name__}")
    config = config or EngineConfig()

    basic_info = raw.get("basicInfo") or raw.get("basic_info") or {}
    anchor = parse_date(basic_info.get("date")) if isinstance(basic_info, Mapping) else None
    if anchor is None:
        anchor = config.anchor_date

    _logger.debug("Loading case record anchor=%s payload=%s", anchor, redact_for_log(dict(raw)))
    try:
        return CaseSnapshot.model_validate(dict(raw), context={ANCHOR_DATE_KEY: anchor})
    except ValidationError as err:
        raise OhcaSnapshotError(
            f"case record has an invalid structure ({err.error_count()} errors)",
            errors=err.errors(include_url=False),
        ) from err
