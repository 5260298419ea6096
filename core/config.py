"""Configuration constants for cardquiz application."""

DEFAULT_USER = 'player'

# Result history
HISTORY_LIMIT = 2000          # Most recent results kept; older ones are dropped
RECENT_RESULTS_COUNT = 5      # Entries shown in the "recent" summary

# Price grading
MIN_TOLERANCE_PCT = 1
MAX_TOLERANCE_PCT = 30
DEFAULT_TOLERANCE_PCT = 10    # +/- percent of the correct price

# Grade filters for the question pool
GRADE_FILTER_ALL = 'all'
GRADE_FILTER_TOP_ONLY = 'grade-10-only'
GRADE_FILTER_BELOW_TOP = 'below-grade-10'
GRADE_FILTERS = (GRADE_FILTER_ALL, GRADE_FILTER_TOP_ONLY, GRADE_FILTER_BELOW_TOP)
DEFAULT_GRADE_FILTER = GRADE_FILTER_ALL
TOP_GRADE = '10'

# Price parsing
CURRENCY_MARKERS = ('円', '¥', '￥')

# Environment variables read by the server
STATE_FILE_ENV = 'CARDQUIZ_STATE_FILE'
LOG_LEVEL_ENV = 'CARDQUIZ_LOG_LEVEL'
