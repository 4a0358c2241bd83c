"""Parse human-readable delays such as '500ms', '2s' or '1.5m'."""

import re

from shared.config import DEFAULT_DELAY_MS, get_logger

logger = get_logger(__name__)

_DURATION_RE = re.compile(r'(\d+(?:\.\d+)?)(ms|s|m|h)?', re.IGNORECASE)

_UNIT_MS = {
    'ms': 1,
    's': 1000,
    'm': 60 * 1000,
    'h': 60 * 60 * 1000,
}


def parse_duration(value: str | None) -> float:
    """Convert a duration string to milliseconds.

    A missing unit means milliseconds. Empty input returns the default delay;
    malformed input logs a warning and also returns the default.
    """
    if not value:
        return DEFAULT_DELAY_MS

    match = _DURATION_RE.fullmatch(str(value))
    if not match:
        logger.warning('Invalid duration format: %s, using default %sms', value, DEFAULT_DELAY_MS)
        return DEFAULT_DELAY_MS

    amount = float(match.group(1))
    unit = (match.group(2) or 'ms').lower()
    return amount * _UNIT_MS[unit]
