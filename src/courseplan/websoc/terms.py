import re
from datetime import datetime
from typing import Optional

TERM_RE = re.compile(r"^(\d{4})\s+(Fall|Winter|Spring|Summer1|Summer2|Summer10wk)$", re.I)


def get_current_term(now: Optional[datetime] = None) -> str:
    """Current quarter string, e.g. '2026 Winter'."""
    now = now or datetime.now()
    year = now.year
    month = now.month  # 1-12
    if 1 <= month <= 3:
        return f"{year} Winter"
    if 4 <= month <= 6:
        return f"{year} Spring"
    if 7 <= month <= 9:
        return f"{year} Summer1"
    return f"{year} Fall"


def term_to_year_quarter(term: str):
    """'2025 Fall' -> {'year': '2025', 'quarter': 'Fall'}, or None if unrecognized."""
    if not term:
        return None
    m = TERM_RE.match(term.strip())
    if not m:
        return None
    return {"year": m.group(1), "quarter": m.group(2)}
