"""Text and price normalization helpers for cardquiz."""

import math
import re
import secrets

from .config import CURRENCY_MARKERS

# Full-width digits (U+FF10-U+FF19), comma and plus
_HALF_WIDTH_TABLE = {code: code - 0xFEE0 for code in range(0xFF10, 0xFF1A)}
_HALF_WIDTH_TABLE[ord('，')] = ord(',')
_HALF_WIDTH_TABLE[ord('＋')] = ord('+')

_PRICE_STRIP_TABLE = {ord(ch): None for ch in (',',) + CURRENCY_MARKERS}

_NUMBER_RE = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def to_half_width(text: str) -> str:
    """Map full-width digits, comma and plus to ASCII. Other characters pass through."""
    if not text:
        return ''
    return text.translate(_HALF_WIDTH_TABLE)


def canonicalize(text: str) -> str:
    """Canonical comparable form: half-width, lower-case, no whitespace anywhere."""
    text = to_half_width(text).strip().lower()
    return re.sub(r'\s+', '', text)


def parse_price(raw) -> float:
    """Parse a price-like value such as '58,000円' or '５８０００'.

    Returns math.nan when the input is missing, empty or not a finite number.
    """
    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float)):
        return float(raw) if math.isfinite(raw) else math.nan
    text = to_half_width(str(raw)).translate(_PRICE_STRIP_TABLE).strip()
    if not _NUMBER_RE.fullmatch(text):
        return math.nan
    value = float(text)
    return value if math.isfinite(value) else math.nan


def new_card_id() -> str:
    """Generate a short random card identifier."""
    return secrets.token_hex(6)
