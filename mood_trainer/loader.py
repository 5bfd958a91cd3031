# mood_trainer/loader.py
"""
CSV loading for the annotated movie dataset.

The file is read whole, blank lines are dropped and the first line is the
header. Data rows are split with a small regex that keeps double-quoted
fields (which may contain commas) together.
"""
import re
import logging
from typing import List

from .errors import MissingColumnError
from .schemas import MovieRecord

logger = logging.getLogger(__name__)

TEXT_COLUMN = "Overview"
SCORE_COLUMNS = {
    "Sentiment_Score": "sentiment",
    "Valence_Score": "valence",
    "Arousal_Score": "arousal",
    "Dominance_Score": "dominance",
    "Tempo": "tempo",
}
REQUIRED_COLUMNS = (TEXT_COLUMN,) + tuple(SCORE_COLUMNS)

LINE_SPLIT = re.compile(r"\r?\n")
FIELD_PATTERN = re.compile(r'(".*?"|[^",]+|(?<=,)(?=,))')
EDGE_QUOTES = re.compile(r'^"|"$')


def split_fields(line):
    """Split one CSV row, stripping surrounding quotes and whitespace."""
    return [EDGE_QUOTES.sub("", value).strip() for value in FIELD_PATTERN.findall(line)]


def coerce(value):
    try:
        return float(value)
    except ValueError:
        return value


def load_movies(path) -> List[MovieRecord]:
    with open(path, "r", encoding="utf-8-sig") as f:
        content = f.read()

    lines = [line for line in LINE_SPLIT.split(content) if line.strip()]
    if not lines:
        raise MissingColumnError(REQUIRED_COLUMNS[0])

    headers = [header.strip() for header in lines[0].split(",")]
    for column in REQUIRED_COLUMNS:
        if column not in headers:
            raise MissingColumnError(column)

    records = []
    for line_no, line in enumerate(lines[1:], start=2):
        row = dict(zip(headers, split_fields(line)))
        missing = [column for column in REQUIRED_COLUMNS if column not in row]
        if missing:
            logger.warning("Skipping short row %d in %s (missing %s)", line_no, path, ", ".join(missing))
            continue

        try:
            scores = {field: float(coerce(row[column])) for column, field in SCORE_COLUMNS.items()}
        except ValueError:
            logger.warning("Skipping row %d in %s: non-numeric score", line_no, path)
            continue

        records.append(MovieRecord(text=row[TEXT_COLUMN], **scores))

    return records
