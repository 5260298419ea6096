"""Exceptions raised by the quiz core."""


class QuizError(Exception):
    """Base exception for cardquiz."""
    pass


class IncompleteAnswer(QuizError):
    """Raised when the answer has no usable name or price. Nothing is graded."""
    pass


class NoEligibleCards(QuizError):
    """Raised when no active card passes the grade filter."""
    pass


class InvalidSelectorInput(QuizError):
    """Raised when weighted selection gets empty or mismatched items/weights."""
    pass


class NoActiveQuestion(QuizError):
    """Raised when an answer is submitted before a question was drawn."""
    pass


class InvalidSetting(QuizError, ValueError):
    """Raised when a setting value is out of range or unknown."""
    pass


class CardImportError(QuizError, ValueError):
    """Raised when an imported deck has no usable rows."""
    pass
