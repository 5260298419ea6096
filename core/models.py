"""Domain models for cardquiz application."""

import logging
import random
import time
from dataclasses import dataclass, field

from .config import (
    DEFAULT_USER, HISTORY_LIMIT,
    MIN_TOLERANCE_PCT, MAX_TOLERANCE_PCT, DEFAULT_TOLERANCE_PCT,
    GRADE_FILTERS, DEFAULT_GRADE_FILTER, GRADE_FILTER_TOP_ONLY, GRADE_FILTER_BELOW_TOP
)
from .errors import InvalidSetting, NoActiveQuestion
from .grading import Verdict, grade_answer
from .selection import filter_pool, select_next
from .stats import Summary, summarize
from .utils import new_card_id, parse_price

logger = logging.getLogger(__name__)

# Grade filter values saved by the legacy browser app
_LEGACY_GRADE_FILTERS = {
    '10': GRADE_FILTER_TOP_ONLY,
    '9以下': GRADE_FILTER_BELOW_TOP,
}


def grade_label(value) -> str | None:
    """Normalize a grade from CSV/JSON (10, 10.0, '10', '') to a label or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    label = str(value).strip()
    return label or None


@dataclass(frozen=True)
class Card:
    """A quiz item: card image with its name and market price."""

    id: str
    name: str
    price: float
    img: str = ''
    grade: str | None = None
    active: bool = True
    aliases: tuple = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'img': self.img,
            'name': self.name,
            'grade': self.grade,
            'price': self.price,
            'active': self.active,
            'aliases': list(self.aliases)
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Card':
        return cls(
            id=data.get('id') or new_card_id(),
            name=str(data['name']),
            price=float(data['price']),
            img=data.get('img') or '',
            grade=grade_label(data.get('grade', data.get('psa'))),
            active=data.get('active', True) is not False,
            aliases=tuple(data.get('aliases') or ())
        )


@dataclass(frozen=True)
class ResultEntry:
    """One graded attempt. Card name and price are copied at grading time."""

    ts: int
    user: str
    card_id: str
    answered_name: str
    answered_price: float
    correct: bool
    name_ok: bool
    price_ok: bool
    correct_name: str
    correct_price: float

    def to_dict(self) -> dict:
        return {
            'ts': self.ts,
            'user': self.user,
            'card_id': self.card_id,
            'answered_name': self.answered_name,
            'answered_price': self.answered_price,
            'correct': self.correct,
            'name_ok': self.name_ok,
            'price_ok': self.price_ok,
            'correct_name': self.correct_name,
            'correct_price': self.correct_price
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ResultEntry':
        # Accept both our keys and the camelCase keys of the legacy browser app
        def get(key, legacy_key, default=None):
            return data.get(key, data.get(legacy_key, default))

        return cls(
            ts=int(data.get('ts', 0)),
            user=data.get('user', DEFAULT_USER),
            card_id=get('card_id', 'cardId', ''),
            answered_name=get('answered_name', 'answeredName', ''),
            answered_price=parse_price(get('answered_price', 'answeredPrice')),
            correct=bool(data.get('correct', False)),
            name_ok=bool(get('name_ok', 'nameOk', False)),
            price_ok=bool(get('price_ok', 'priceOk', False)),
            correct_name=get('correct_name', 'correctName', ''),
            correct_price=parse_price(get('correct_price', 'correctPrice'))
        )


class QuizState:
    """Session state: deck, settings, miss counts and result history.

    All history and miss-count changes go through record_attempt, reset_all
    and replace_cards.
    """

    def __init__(self, cards: list[Card] = None, user: str = DEFAULT_USER):
        self.user = user
        self.cards = list(cards) if cards else []
        self.miss_map = {}   # card id -> number of incorrect attempts
        self.results = []    # ResultEntry, most recent first
        self.tolerance_pct = DEFAULT_TOLERANCE_PCT
        self.strict_name = False
        self.grade_filter = DEFAULT_GRADE_FILTER
        self.current_card_id = None  # Not persisted

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_card(self, card_id: str) -> Card | None:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    @property
    def current_card(self) -> Card | None:
        if self.current_card_id is None:
            return None
        return self.get_card(self.current_card_id)

    def miss_count(self, card_id: str) -> int:
        return self.miss_map.get(card_id, 0)

    def eligible_pool(self) -> list[Card]:
        """Active cards passing the current grade filter."""
        return filter_pool(self.cards, self.grade_filter)

    def summary(self) -> Summary:
        """Stats for the current user."""
        return summarize(self.results, self.user)

    def user_results(self, limit: int = None) -> list[ResultEntry]:
        entries = self.summary().entries
        return list(entries if limit is None else entries[:limit])

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def advance(self, rng=random) -> Card:
        """Draw the next question and make it current."""
        card = select_next(self.eligible_pool(), self.miss_map, rng)
        self.current_card_id = card.id
        return card

    def submit(self, answered_name: str, answered_price_raw, ts: int = None) -> ResultEntry:
        """Grade an answer for the current question and record it."""
        card = self.current_card
        if card is None:
            raise NoActiveQuestion('No question is active. Draw the next card first.')
        verdict = grade_answer(card, answered_name, answered_price_raw,
                               self.tolerance_pct, self.strict_name)
        return self.record_attempt(self.user, card, answered_name,
                                   parse_price(answered_price_raw), verdict, ts)

    def record_attempt(self, user: str, card: Card, answered_name: str,
                       answered_price: float, verdict: Verdict, ts: int = None) -> ResultEntry:
        """Prepend a result entry and bump the card's miss count on a wrong answer."""
        entry = ResultEntry(
            ts=ts if ts is not None else int(time.time() * 1000),
            user=user,
            card_id=card.id,
            answered_name=answered_name,
            answered_price=answered_price,
            correct=verdict.correct,
            name_ok=verdict.name_ok,
            price_ok=verdict.price_ok,
            correct_name=verdict.correct_name,
            correct_price=verdict.correct_price
        )
        self.results.insert(0, entry)
        del self.results[HISTORY_LIMIT:]
        self.miss_map[card.id] = self.miss_map.get(card.id, 0) + (0 if verdict.correct else 1)
        logger.debug(f"Recorded {'correct' if verdict.correct else 'wrong'} answer for card {card.id} "
                     f"by {user} (misses: {self.miss_map[card.id]})")
        return entry

    def reset_all(self) -> None:
        """Clear the whole history and every miss count."""
        self.results = []
        self.miss_map = {}
        logger.info("Result history and miss counts cleared")

    def replace_cards(self, cards: list[Card]) -> None:
        """Install a new deck. Miss counts are dropped; history is kept."""
        self.cards = list(cards)
        self.miss_map = {}
        self.current_card_id = None
        logger.info(f"Deck replaced: {len(self.cards)} cards")

    def update_settings(self, user: str = None, tolerance_pct: int = None,
                        strict_name: bool = None, grade_filter: str = None) -> None:
        """Validate and apply settings. Nothing changes if any value is invalid."""
        if user is not None and not user.strip():
            raise InvalidSetting('User name must not be blank')
        if tolerance_pct is not None:
            if isinstance(tolerance_pct, bool) or not isinstance(tolerance_pct, int):
                raise InvalidSetting(f"Tolerance must be an integer, got {tolerance_pct!r}")
            if not MIN_TOLERANCE_PCT <= tolerance_pct <= MAX_TOLERANCE_PCT:
                raise InvalidSetting(
                    f"Tolerance must be between {MIN_TOLERANCE_PCT} and {MAX_TOLERANCE_PCT}")
        if grade_filter is not None and grade_filter not in GRADE_FILTERS:
            raise InvalidSetting(f"Unknown grade filter: {grade_filter!r}")

        if user is not None:
            self.user = user.strip()
        if tolerance_pct is not None:
            self.tolerance_pct = tolerance_pct
        if strict_name is not None:
            self.strict_name = bool(strict_name)
        if grade_filter is not None:
            self.grade_filter = grade_filter
        logger.info(f"Settings: user={self.user} tolerance={self.tolerance_pct}% "
                    f"strict_name={self.strict_name} grade_filter={self.grade_filter}")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            'user': self.user,
            'cards': [c.to_dict() for c in self.cards],
            'miss_map': dict(self.miss_map),
            'results': [r.to_dict() for r in self.results],
            'tolerance_pct': self.tolerance_pct,
            'strict_name': self.strict_name,
            'grade_filter': self.grade_filter
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'QuizState':
        state = cls(user=data.get('user') or DEFAULT_USER)
        state.cards = [Card.from_dict(c) for c in data.get('cards', [])]
        miss_map = data.get('miss_map', data.get('missMap', {}))
        state.miss_map = {card_id: int(count) for card_id, count in miss_map.items()}
        state.results = [ResultEntry.from_dict(r) for r in data.get('results', [])][:HISTORY_LIMIT]

        tolerance = data.get('tolerance_pct', data.get('tolPct', DEFAULT_TOLERANCE_PCT))
        try:
            tolerance = int(tolerance)
        except (TypeError, ValueError):
            tolerance = DEFAULT_TOLERANCE_PCT
        state.tolerance_pct = min(max(tolerance, MIN_TOLERANCE_PCT), MAX_TOLERANCE_PCT)

        state.strict_name = bool(data.get('strict_name', data.get('strictName', False)))

        grade_filter = data.get('grade_filter', data.get('psaFilter', DEFAULT_GRADE_FILTER))
        grade_filter = _LEGACY_GRADE_FILTERS.get(grade_filter, grade_filter)
        state.grade_filter = grade_filter if grade_filter in GRADE_FILTERS else DEFAULT_GRADE_FILTER
        return state

    def get_summary_display(self) -> str:
        """One-line progress display, e.g. '7/10 correct (70%)'."""
        summary = self.summary()
        return f"{summary.correct}/{summary.total} correct ({summary.rate}%)"
