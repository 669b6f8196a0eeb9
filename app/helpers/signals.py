"""
Text signal extraction over free-text profile and job fields.

Everything here is a pure function of its arguments so the parsing rules can
be tested apart from the scoring weights.
"""
import re
from datetime import date
from typing import Iterable, List, Optional, Tuple

# Ordered: the first keyword that appears in an education entry sets its rank.
DEGREE_RANKS: List[Tuple[str, int]] = [
    ("phd", 100),
    ("doctorate", 100),
    ("master", 85),
    ("bachelor", 70),
    ("associate", 60),
]

# (keywords, floor); the first group found in the text applies.
SENIORITY_FLOORS: List[Tuple[Tuple[str, ...], int]] = [
    (("senior", "lead"), 5),
    (("junior", "entry"), 1),
    (("mid-level", "intermediate"), 3),
]

YEARS_RE = re.compile(r"(\d+)\+?\s*years?")
YEARS_RANGE_RE = re.compile(r"(\d+)\s*-\s*(\d+)\s*years?")
NUMBER_RE = re.compile(r"\d+")
THOUSANDS_SEP_RE = re.compile(r"(?<=\d),(?=\d{3}\b)")


def normalize(text: Optional[str]) -> str:
    return (text or "").lower().strip()


def round_half_up(x: float) -> int:
    return int(x + 0.5) if x >= 0 else -int(-x + 0.5)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from start to end, never negative."""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    return max(months, 0)


def total_experience_years(entries: Iterable, today: date) -> float:
    """Sum the tenure of every dated entry; open-ended or current entries run to today."""
    total_months = 0
    for entry in entries:
        if entry.start_date is None:
            continue
        end = today if entry.current or entry.end_date is None else entry.end_date
        total_months += months_between(entry.start_date, end)
    return total_months / 12


def required_years(text: str) -> int:
    """Years of experience a posting asks for, 0 when nothing is detected.

    "5+ years" and "5 years" give 5 and a range such as "3-5 years" gives its
    lower bound. Only the first mention counts. Seniority words then set a
    floor.
    """
    low = normalize(text)
    required = 0

    # collapse ranges to their lower bound so the first mention reads "3 years"
    m = YEARS_RE.search(YEARS_RANGE_RE.sub(lambda r: f"{r.group(1)} years", low))
    if m:
        required = int(m.group(1))

    for keywords, floor in SENIORITY_FLOORS:
        if any(k in low for k in keywords):
            required = max(required, floor)
            break
    return required


def degree_rank(text: Optional[str]) -> int:
    low = normalize(text)
    for keyword, rank in DEGREE_RANKS:
        if keyword in low:
            return rank
    return 0


def highest_degree_rank(degrees: Iterable[Optional[str]]) -> int:
    return max((degree_rank(d) for d in degrees), default=0)


def required_degree_rank(requirements: Optional[str]) -> int:
    """Highest degree mentioned anywhere in the requirements text."""
    low = normalize(requirements)
    return max((rank for keyword, rank in DEGREE_RANKS if keyword in low), default=0)


def first_number(text: Optional[str]) -> int:
    """First integer in the text with thousands separators dropped, 0 if none."""
    if not text:
        return 0
    m = NUMBER_RE.search(THOUSANDS_SEP_RE.sub("", text))
    return int(m.group(0)) if m else 0


def title_words(title: Optional[str]) -> List[str]:
    return [w for w in normalize(title).split(" ") if len(w) > 3]
