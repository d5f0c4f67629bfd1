"""Structural statistics for delimited and spreadsheet tables."""

import csv
import re
from collections import Counter
from collections.abc import Sequence

DELIMITERS: tuple[str, ...] = (",", "\t", ";", "|")
DEFAULT_DELIMITER = ","

_SNIFF_LINES = 20

UNIT_TOKENS_RE = re.compile(r"(unit|units|mg/dl|mmol/l|g/l|iu/l)", re.IGNORECASE)


def _non_blank_lines(text: str) -> list[str]:
    return [line for line in text.splitlines() if line.strip()]


def detect_delimiter(sample: str) -> str:
    """Pick the most plausible field separator for a text sample.

    Each candidate is ranked by how many of the first lines contain it
    exactly as often as the first line does, then by total occurrences.
    Ties keep the earlier candidate in ``DELIMITERS``.
    """
    lines = _non_blank_lines(sample)[:_SNIFF_LINES]
    best = DEFAULT_DELIMITER
    best_rank = (0, 0)
    for candidate in DELIMITERS:
        counts = [line.count(candidate) for line in lines]
        total = sum(counts)
        if not total:
            continue
        reference = next((c for c in counts if c), 0)
        steady = sum(1 for c in counts if c == reference)
        rank = (steady, total)
        if rank > best_rank:
            best, best_rank = candidate, rank
    return best


def mode(counts: Sequence[int]) -> int:
    """Most frequent value; ties go to the value that reached the top count first.

    Returns 0 for an empty sequence.
    """
    if not counts:
        return 0
    tally = Counter(counts)
    top = max(tally.values())
    return next(value for value in counts if tally[value] == top)


def inconsistency_rate(counts: Sequence[int]) -> float:
    """Fraction of rows whose column count differs from the mode; 1.0 for no rows."""
    if not counts:
        return 1.0
    expected = mode(counts)
    return sum(1 for c in counts if c != expected) / len(counts)


def empty_cell_rate(rows: Sequence[Sequence[object]]) -> float:
    """Share of ``None``/empty-string cells; 1.0 when there are no cells at all."""
    total = 0
    empty = 0
    for row in rows:
        for cell in row:
            total += 1
            if cell is None or cell == "":
                empty += 1
    return empty / total if total else 1.0


def has_unit_tokens(text: str) -> bool:
    return UNIT_TOKENS_RE.search(text) is not None


def decode_sample(data: bytes, max_bytes: int) -> str:
    """Decode the leading ``max_bytes`` of a text file, tolerating bad bytes."""
    return data[:max_bytes].decode("utf-8-sig", errors="replace")


def split_rows(sample: str, delimiter: str, max_rows: int) -> list[list[str]]:
    """Parse the first ``max_rows`` non-blank lines of a delimited sample."""
    lines = _non_blank_lines(sample)[:max_rows]
    return [row for row in csv.reader(lines, delimiter=delimiter, strict=False)]
