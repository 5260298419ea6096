from .models import Card, ResultEntry, QuizState
from .grading import Verdict, grade_answer
from .selection import filter_pool, select_next, weighted_pick
from .stats import Summary, summarize
from .interfaces import Storage
from .utils import to_half_width, canonicalize, parse_price
from .errors import (
    QuizError, IncompleteAnswer, NoEligibleCards, InvalidSelectorInput,
    NoActiveQuestion, InvalidSetting, CardImportError
)
from .config import (
    HISTORY_LIMIT, MIN_TOLERANCE_PCT, MAX_TOLERANCE_PCT, DEFAULT_TOLERANCE_PCT,
    GRADE_FILTERS, DEFAULT_GRADE_FILTER
)

__all__ = [
    'Card', 'ResultEntry', 'QuizState',
    'Verdict', 'grade_answer',
    'filter_pool', 'select_next', 'weighted_pick',
    'Summary', 'summarize',
    'Storage',
    'to_half_width', 'canonicalize', 'parse_price',
    'QuizError', 'IncompleteAnswer', 'NoEligibleCards', 'InvalidSelectorInput',
    'NoActiveQuestion', 'InvalidSetting', 'CardImportError',
    'HISTORY_LIMIT', 'MIN_TOLERANCE_PCT', 'MAX_TOLERANCE_PCT', 'DEFAULT_TOLERANCE_PCT',
    'GRADE_FILTERS', 'DEFAULT_GRADE_FILTER'
]
