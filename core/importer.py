"""Deck import from CSV and JSON text.

Recognized columns (first non-empty wins):

    IMG_URL / img / image
    NAME / name
    PSA / psa / GRADE / grade
    PRICE / price
    ACTIVE / active
    ALIASES / aliases
"""

import csv
import io
import json
import logging
import math
import re

from .errors import CardImportError
from .models import Card, grade_label
from .utils import new_card_id, parse_price

logger = logging.getLogger(__name__)

IMG_KEYS = ('IMG_URL', 'img', 'image')
NAME_KEYS = ('NAME', 'name')
GRADE_KEYS = ('PSA', 'psa', 'GRADE', 'grade')
PRICE_KEYS = ('PRICE', 'price')
ACTIVE_KEYS = ('ACTIVE', 'active')
ALIAS_KEYS = ('ALIASES', 'aliases')

_ALIAS_SPLIT_RE = re.compile(r'[,、\s]+')


def _first(row: dict, keys: tuple):
    """Value of the first key with a non-empty value, else None."""
    for key in keys:
        value = row.get(key)
        if value is None or value == '':
            continue
        return value
    return None


def split_aliases(value) -> tuple:
    """Split an alias cell ('リザ, charizard' or a JSON list) into a tuple."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        parts = []
        for item in value:
            parts.extend(_ALIAS_SPLIT_RE.split(str(item)))
    else:
        parts = _ALIAS_SPLIT_RE.split(str(value))
    return tuple(p for p in parts if p)


def parse_active(value) -> bool:
    """Cards are active unless marked false."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() != 'false'


def card_from_row(row: dict) -> Card | None:
    """Build a card from one CSV row or JSON object, or None if it is unusable."""
    name = _first(row, NAME_KEYS)
    name = str(name).strip() if name is not None else ''
    price = parse_price(_first(row, PRICE_KEYS))
    if not name or math.isnan(price) or price < 0:
        logger.debug(f"Skipping row without a valid name/price: {row}")
        return None
    img = _first(row, IMG_KEYS)
    return Card(
        id=new_card_id(),
        img=str(img) if img is not None else '',
        name=name,
        grade=grade_label(_first(row, GRADE_KEYS)),
        price=price,
        active=parse_active(_first(row, ACTIVE_KEYS)),
        aliases=split_aliases(_first(row, ALIAS_KEYS))
    )


def _collect(rows) -> list[Card]:
    cards = [card for card in (card_from_row(r) for r in rows) if card is not None]
    if not cards:
        raise CardImportError('No valid rows found')
    return cards


def parse_cards_csv(text: str) -> list[Card]:
    """Parse a CSV deck with a header row."""
    reader = csv.DictReader(io.StringIO(text.lstrip('\ufeff')))
    rows = [
        {k.strip(): v for k, v in row.items() if k is not None}
        for row in reader
        if any((v or '').strip() for v in row.values() if isinstance(v, str))
    ]
    cards = _collect(rows)
    logger.info(f"Imported {len(cards)} of {len(rows)} CSV rows")
    return cards


def parse_cards_json(text: str) -> list[Card]:
    """Parse a JSON array of card objects."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CardImportError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise CardImportError('Expected a JSON array of cards')
    rows = [item for item in data if isinstance(item, dict)]
    cards = _collect(rows)
    logger.info(f"Imported {len(cards)} of {len(data)} JSON items")
    return cards


def parse_cards(text: str, fmt: str) -> list[Card]:
    """Parse a deck in 'csv' or 'json' format."""
    if fmt == 'csv':
        return parse_cards_csv(text)
    if fmt == 'json':
        return parse_cards_json(text)
    raise CardImportError(f"Unsupported format: {fmt!r}")
