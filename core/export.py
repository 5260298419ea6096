"""CSV export of the result history."""

import csv
import io
from datetime import datetime, timedelta, timezone

EXPORT_COLUMNS = [
    'ts', 'user', 'cardId', 'answeredName', 'answeredPrice',
    'correct', 'nameOk', 'priceOk', 'correctName', 'correctPrice'
]


def format_timestamp(ts_ms: int) -> str:
    """Epoch milliseconds as ISO-8601 UTC, e.g. 2024-05-01T09:30:00.000Z."""
    seconds, millis = divmod(int(ts_ms), 1000)
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(milliseconds=millis)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _number(value: float):
    return int(value) if float(value).is_integer() else value


def _flag(value: bool) -> str:
    return 'true' if value else 'false'


def result_row(entry) -> dict:
    return {
        'ts': format_timestamp(entry.ts),
        'user': entry.user,
        'cardId': entry.card_id,
        'answeredName': entry.answered_name,
        'answeredPrice': _number(entry.answered_price),
        'correct': _flag(entry.correct),
        'nameOk': _flag(entry.name_ok),
        'priceOk': _flag(entry.price_ok),
        'correctName': entry.correct_name,
        'correctPrice': _number(entry.correct_price)
    }


def results_to_csv(results) -> str:
    """One CSV row per result entry, in history order."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS, lineterminator='\n')
    writer.writeheader()
    for entry in results:
        writer.writerow(result_row(entry))
    return buffer.getvalue()
