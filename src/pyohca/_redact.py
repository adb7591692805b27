"""Redaction of case records for debug logs.

Case records carry crew names, case identifiers and free-text reviewer
notes.  Timestamps and interruption codes are kept so a DEBUG trace of
:func:`pyohca.ingestion.case.load_case` still shows what was parsed.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_PERSONAL_FIELDS: frozenset[str] = frozenset(
    {
        "reviewer",
        "caseid",
        "memo",
        "teamleader",
        "ivoperator",
        "iooperator",
        "endooperator",
        *(f"member{slot}" for slot in range(1, 7)),
    }
)

_REDACTED = "<redacted>"


def _is_personal(key: Any) -> bool:
    return str(key).lower().replace("_", "") in _PERSONAL_FIELDS


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a copy of a raw case record with personal fields masked.

    Empty personal fields are left as they are.  Strings longer than
    *max_string* are truncated.
    """
    if isinstance(value, Mapping):
        return {
            str(key): (_REDACTED if item else item) if _is_personal(key) else redact_for_log(item, max_string=max_string)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_for_log(item, max_string=max_string) for item in value]
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value
