"""Answer grading: name matching and price tolerance checks."""

import math
from dataclasses import dataclass

from .errors import IncompleteAnswer
from .utils import canonicalize, parse_price


@dataclass(frozen=True)
class Verdict:
    """Outcome of grading one answer against one card."""

    name_ok: bool
    price_ok: bool
    correct: bool
    correct_name: str
    correct_price: float

    def to_dict(self) -> dict:
        return {
            'name_ok': self.name_ok,
            'price_ok': self.price_ok,
            'correct': self.correct,
            'correct_name': self.correct_name,
            'correct_price': self.correct_price
        }


def name_candidates(card) -> list[str]:
    """Canonical forms of the card name and its aliases, blanks removed."""
    candidates = [canonicalize(card.name)] + [canonicalize(a) for a in card.aliases]
    return [c for c in candidates if c]


def name_matches(card, canonical_answer: str, strict: bool = False) -> bool:
    """Check a canonicalized answer against the card name and aliases.

    Strict mode needs an exact candidate. Lenient mode accepts containment in
    either direction, so 'pikachu' matches 'pikachupromo' and vice versa.
    """
    candidates = name_candidates(card)
    if strict:
        return canonical_answer in candidates
    return any(c in canonical_answer or canonical_answer in c for c in candidates)


def price_matches(card_price: float, answered_price: float, tolerance_pct: int) -> bool:
    """Inclusive check of |answer - price| against tolerance_pct of the correct price."""
    return abs(answered_price - card_price) <= card_price * tolerance_pct / 100


def grade_answer(card, answered_name: str, answered_price_raw,
                 tolerance_pct: int, strict_name: bool = False) -> Verdict:
    """Grade a name/price answer for a card.

    Raises IncompleteAnswer when the name is blank or the price is not a number.
    """
    canonical_answer = canonicalize(answered_name)
    answered_price = parse_price(answered_price_raw)
    if not canonical_answer or math.isnan(answered_price):
        raise IncompleteAnswer('Both a card name and a price are required')

    correct_price = float(card.price)
    name_ok = name_matches(card, canonical_answer, strict_name)
    price_ok = price_matches(correct_price, answered_price, tolerance_pct)
    return Verdict(
        name_ok=name_ok,
        price_ok=price_ok,
        correct=name_ok and price_ok,
        correct_name=card.name,
        correct_price=correct_price
    )
