# src/courseplan/timeparse.py
from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .models import Day, TimeInterval

TBA_LIKE = {"TBA", "ONLINE", "REMOTE", "WEB", "ARR"}

# Banner uses one letter per day (R = Thursday); WebSoc uses Tu/Th.
DAY_TOKENS = {
    "M": Day.MON,
    "T": Day.TUE,
    "Tu": Day.TUE,
    "W": Day.WED,
    "R": Day.THU,
    "Th": Day.THU,
    "F": Day.FRI,
}


TIME_RANGE_RE = re.compile(
    r"""
    ^\s*
    (?P<start>\d{1,2}:\d{2})(?P<start_suffix>[ap]m?|[ap])?
    \s*[-–—]\s*
    (?P<end>\d{1,2}:\d{2})(?P<end_suffix>[ap]m?|[ap])?
    \s*$
    """,
    re.IGNORECASE | re.VERBOSE,
)


def time_to_minutes(hhmm: str, ampm: str) -> int:
    """
    hhmm: '2:00'
    ampm: 'a'/'p'/'am'/'pm' (case-insensitive)
    Returns minutes since midnight (0..1439)
    """
    h_str, m_str = hhmm.split(":")
    h = int(h_str)
    m = int(m_str)
    if not 1 <= h <= 12 or not 0 <= m < 60:
        raise ValueError(f"Invalid clock time: {hhmm}")

    a = ampm.lower()
    if a in ("a", "am"):
        if h == 12:
            h = 0
    elif a in ("p", "pm"):
        if h != 12:
            h += 12
    else:
        raise ValueError(f"Invalid am/pm suffix: {ampm}")

    return h * 60 + m


def parse_clock(s: str) -> Tuple[int, int]:
    """
    '06:00 pm' -> (18, 0), '12:00 am' -> (0, 0), '7:15 am' -> (7, 15)
    """
    parts = s.strip().split()
    if len(parts) != 2:
        raise ValueError(f"Expected a time like '06:00 pm', got {s!r}")
    total = time_to_minutes(parts[0], parts[1])
    return divmod(total, 60)


def _norm_suffix(x: Optional[str]) -> Optional[str]:
    if not x:
        return None
    a = x.lower()
    if a in ("a", "am"):
        return "am"
    if a in ("p", "pm"):
        return "pm"
    return None


def _choose_closest(unmarked_hhmm: str, marked_min: int) -> Optional[int]:
    # Pick the AM/PM reading of an unmarked time closest to its marked partner.
    best = None
    for candidate in ("am", "pm"):
        try:
            mmin = time_to_minutes(unmarked_hhmm, candidate)
        except ValueError:
            continue
        delta = abs(mmin - marked_min)
        if best is None or delta < best[0]:
            best = (delta, mmin)
    return best[1] if best else None


def _default_ampm_for_hour(h: int) -> str:
    # 8-11 read as AM; 12 and 1-7 as PM.
    if 8 <= h <= 11:
        return "am"
    if h == 12 or 1 <= h <= 7:
        return "pm"
    return "am"


def parse_meeting_time(time_raw: str) -> Optional[Tuple[int, int]]:
    """
    Parses meeting times like:
      '09:00 am-09:50 am'   (Banner)
      '2:00- 4:50p'         (WebSoc, suffix only on the end)
      '2:00-3:20pm'
    A missing AM/PM is inferred from the other end, or from the hour when
    neither end carries one (falling back to the shortest AM/PM pairing
    when the hour-based reading ends before it starts).
    Returns (start_min, end_min) or None if unusable (TBA/empty/end before start).
    """
    if not time_raw:
        return None
    s = time_raw.strip()
    if not s or s.upper() in TBA_LIKE:
        return None

    m = TIME_RANGE_RE.match(s.replace(" ", ""))
    if not m:
        return None

    start_hhmm = m.group("start")
    end_hhmm = m.group("end")
    start_suf = _norm_suffix(m.group("start_suffix"))
    end_suf = _norm_suffix(m.group("end_suffix"))

    try:
        if start_suf and end_suf:
            start_min = time_to_minutes(start_hhmm, start_suf)
            end_min = time_to_minutes(end_hhmm, end_suf)
        elif end_suf:
            end_min = time_to_minutes(end_hhmm, end_suf)
            start_min = _choose_closest(start_hhmm, end_min)
        elif start_suf:
            start_min = time_to_minutes(start_hhmm, start_suf)
            end_min = _choose_closest(end_hhmm, start_min)
        else:
            start_min = time_to_minutes(start_hhmm, _default_ampm_for_hour(int(start_hhmm.split(":")[0])))
            end_min = time_to_minutes(end_hhmm, _default_ampm_for_hour(int(end_hhmm.split(":")[0])))
    except ValueError:
        return None

    if start_min is None or end_min is None:
        return None
    if end_min > start_min:
        return (start_min, end_min)
    if start_suf or end_suf:
        return None

    # No suffixes and the hour-based guess runs backwards (e.g. '7:00-8:15'):
    # try every AM/PM pairing and keep the shortest positive duration.
    candidates: List[Tuple[int, int]] = []
    for sa in ("am", "pm"):
        for ea in ("am", "pm"):
            try:
                sm = time_to_minutes(start_hhmm, sa)
                em = time_to_minutes(end_hhmm, ea)
            except ValueError:
                continue
            if em > sm and 0 < (em - sm) <= 12 * 60:
                candidates.append((sm, em))
    if candidates:
        candidates.sort(key=lambda t: t[1] - t[0])
        return candidates[0]
    return None


def parse_days(days_raw: str) -> List[Day]:
    """
    'MWF' -> [MON, WED, FRI]
    'TR' / 'TuTh' -> [TUE, THU]
    Duplicates are dropped, order is preserved. Weekend days are not
    schedulable and raise ValueError, as does any unknown token.
    """
    s = (days_raw or "").replace(" ", "").replace("\xa0", "")
    out: List[Day] = []
    i = 0
    while i < len(s):
        two = s[i:i + 2]
        if two in ("Sa", "Su"):
            raise ValueError(f"Weekend meeting days are not supported: {days_raw!r}")
        if two in ("Tu", "Th"):
            token = two
        else:
            token = s[i]
        if token not in DAY_TOKENS:
            raise ValueError(f"Unknown day token {token!r} in {days_raw!r}")
        day = DAY_TOKENS[token]
        if day not in out:
            out.append(day)
        i += len(token)
    return out


def meeting_intervals(days: List[Day], start_min: int, end_min: int) -> List[TimeInterval]:
    return [TimeInterval(day=d, start_min=start_min, duration_min=end_min - start_min) for d in days]
