"""Internal constants shared across the library."""

from __future__ import annotations

# Raw value the host stores when a procedure was not performed.
NOT_APPLICABLE = "N/A"

# ------------------------------------------------------------------
# Duration arithmetic
# ------------------------------------------------------------------

SECONDS_PER_DAY = 86_400
ROLLOVER_THRESHOLD_SECONDS = 43_200  # diffs below -12 h are treated as midnight crossings
ROSC_TOLERANCE_MS = 1_000

# ------------------------------------------------------------------
# Interruption slots
# ------------------------------------------------------------------

MMSS_LENGTH = 4
BEFORE_PADS_SLOTS = 5
BEFORE_MCPR_SLOTS = 10

# ------------------------------------------------------------------
# Display strings
# ------------------------------------------------------------------

EMPTY_DURATION = "--"
EMPTY_TIME = "--:--:--"
CCF_INSUFFICIENT_DATA = "N/A"
CCF_TIME_ERROR = "time error"
VENTILATION_NOT_PERFORMED = "BVM not performed"
AIRWAY_NOT_PERFORMED = "no advanced airway"
