"""Summary statistics over the result history."""

import math
from dataclasses import dataclass

from .config import RECENT_RESULTS_COUNT


@dataclass(frozen=True)
class Summary:
    """Per-user view of the result history. Entries are most-recent-first."""

    user: str
    total: int
    correct: int
    rate: int
    entries: tuple

    def recent(self, n: int = RECENT_RESULTS_COUNT) -> list:
        return list(self.entries[:max(n, 0)])

    def to_dict(self, recent: int = RECENT_RESULTS_COUNT) -> dict:
        return {
            'user': self.user,
            'total': self.total,
            'correct': self.correct,
            'rate': self.rate,
            'recent': [r.to_dict() for r in self.recent(recent)]
        }


def success_rate(correct: int, total: int) -> int:
    """Percentage rounded half up, 0 when there are no attempts."""
    if total <= 0:
        return 0
    return math.floor(correct / total * 100 + 0.5)


def summarize(results, user: str) -> Summary:
    """Summarize the results recorded for one user."""
    entries = tuple(r for r in results if r.user == user)
    correct = sum(1 for r in entries if r.correct)
    return Summary(
        user=user,
        total=len(entries),
        correct=correct,
        rate=success_rate(correct, len(entries)),
        entries=entries
    )
