"""Question selection weighted by past misses."""

import logging
import random
from bisect import bisect_left
from itertools import accumulate

from .config import GRADE_FILTERS, GRADE_FILTER_TOP_ONLY, GRADE_FILTER_BELOW_TOP, TOP_GRADE
from .errors import InvalidSelectorInput, InvalidSetting, NoEligibleCards
from .utils import canonicalize

logger = logging.getLogger(__name__)


def is_top_grade(card) -> bool:
    """True when the card's grade label canonicalizes to the top grade."""
    if card.grade is None:
        return False
    return canonicalize(str(card.grade)) == TOP_GRADE


def filter_pool(cards, grade_filter: str) -> list:
    """Active cards that pass the grade filter, in deck order."""
    if grade_filter not in GRADE_FILTERS:
        raise InvalidSetting(f"Unknown grade filter: {grade_filter!r}")
    pool = [c for c in cards if c.active is not False]
    if grade_filter == GRADE_FILTER_TOP_ONLY:
        return [c for c in pool if is_top_grade(c)]
    if grade_filter == GRADE_FILTER_BELOW_TOP:
        return [c for c in pool if not is_top_grade(c)]
    return pool


def weighted_pick(items: list, weights: list, rng=random):
    """Pick one item with probability proportional to its weight.

    Uses a cumulative weight array; a draw that lands past the last boundary
    (float rounding) is clamped to the last item.
    """
    if len(items) != len(weights) or not items:
        logger.error(f"weighted_pick got {len(items)} items and {len(weights)} weights")
        raise InvalidSelectorInput('items and weights must be non-empty and the same length')
    if any(w < 0 for w in weights):
        logger.error(f"weighted_pick got negative weights: {weights}")
        raise InvalidSelectorInput('weights must be non-negative')

    cumulative = list(accumulate(weights))
    r = rng.random() * cumulative[-1]
    index = bisect_left(cumulative, r)
    return items[min(index, len(items) - 1)]


def card_weight(card, miss_map: dict) -> int:
    """Baseline weight 1 plus the card's miss count."""
    return 1 + miss_map.get(card.id, 0)


def select_next(pool: list, miss_map: dict, rng=random):
    """Draw the next question card from the eligible pool."""
    if not pool:
        raise NoEligibleCards('No cards available. Import a deck or change the grade filter.')
    weights = [card_weight(c, miss_map) for c in pool]
    card = weighted_pick(pool, weights, rng)
    logger.debug(f"Selected card {card.id} (weight {card_weight(card, miss_map)}/{sum(weights)})")
    return card
