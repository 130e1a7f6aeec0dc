from __future__ import annotations

import csv
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .errors import SectionParseError
from .models import Course, CourseKey, EvaluatedSchedule, Section, TimeInterval
from .timeparse import parse_days

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "dept",
    "course_num",
    "title",
    "section_num",
    "credits",
    "days",
    "start_min",
    "end_min",
]


def build_catalog(sections: Iterable[Section]) -> Dict[CourseKey, Course]:
    """
    Groups sections into courses keyed by (dept, course_num). The course name
    comes from the first section seen; section order is preserved.
    """
    names: Dict[CourseKey, str] = {}
    grouped: Dict[CourseKey, List[Section]] = {}
    for sec in sections:
        key = sec.course_key
        names.setdefault(key, sec.course_name)
        grouped.setdefault(key, []).append(sec)

    return {
        key: Course(name=names[key], dept=key[0], number=key[1], sections=tuple(secs))
        for key, secs in grouped.items()
    }


def _int_field(row: Dict[str, str], name: str, line: int) -> int:
    raw = (row.get(name) or "").strip()
    try:
        # credits may be written as '4.0'
        return int(float(raw)) if name == "credits" else int(raw)
    except (ValueError, OverflowError):
        raise SectionParseError(f"line {line}: bad {name} value {raw!r}") from None


def load_sections_csv(path: str | Path) -> Dict[CourseKey, Course]:
    """
    Reads a section listing with header:
    dept,course_num,title,section_num,credits,days,start_min,end_min
    One row per meeting pattern; rows sharing (dept, course_num, section_num)
    are merged into one section. Rows with TBA or blank days/times are skipped.
    Returns the course catalog keyed by (dept, course_num).
    """
    p = Path(path)
    # (dept, course_num, section_num) -> [title, credits, times]
    pending: Dict[Tuple[str, str, str], List[Any]] = {}

    with p.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        missing = [c for c in CSV_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise SectionParseError(f"{p}: missing column(s): {', '.join(missing)}")

        for line, row in enumerate(reader, start=2):
            dept = (row["dept"] or "").strip().upper()
            course_num = (row["course_num"] or "").strip().upper()
            section_num = (row["section_num"] or "").strip()
            if not dept or not course_num:
                logger.warning("line %d: missing dept/course number, skipping", line)
                continue

            days_raw = (row["days"] or "").strip()
            if not days_raw or days_raw.upper() == "TBA" or not (row["start_min"] or "").strip():
                logger.warning("line %d: %s %s-%s has no meeting time, skipping",
                               line, dept, course_num, section_num)
                continue

            try:
                days = parse_days(days_raw)
            except ValueError as e:
                logger.warning("line %d: %s, skipping", line, e)
                continue

            start_min = _int_field(row, "start_min", line)
            end_min = _int_field(row, "end_min", line)
            credits = _int_field(row, "credits", line)
            try:
                times = [TimeInterval(d, start_min, end_min - start_min) for d in days]
            except ValueError as e:
                raise SectionParseError(f"line {line}: {e}") from None

            entry = pending.setdefault(
                (dept, course_num, section_num),
                [(row["title"] or "").strip(), credits, []],
            )
            entry[2].extend(times)

    sections = [
        Section(
            course_name=title,
            dept=dept,
            course_num=course_num,
            section_num=section_num,
            credits=credits,
            times=tuple(times),
        )
        for (dept, course_num, section_num), (title, credits, times) in pending.items()
    ]
    return build_catalog(sections)


def _interval_to_dict(t: TimeInterval) -> Dict[str, int]:
    return {
        "day": int(t.day) + 1,
        "hour": t.start_hour,
        "minute": t.start_minute,
        "length": t.duration_min,
    }


def schedule_to_dict(ev: EvaluatedSchedule) -> Dict[str, Any]:
    """
    JSON-ready view of one evaluated schedule. Days are 1-based (Monday = 1).
    Infeasible schedules (score -inf) serialize their score as null.
    """
    return {
        "score": ev.score if math.isfinite(ev.score) else None,
        "stats": {
            "s_time": ev.start_hour,
            "start_time_dt": ev.start_time_deviation,
            "bs_time": ev.idle_minutes,
            "back_dorm_count": ev.trip_count,
            "back_to_dorm_minutes": ev.trip_minutes,
            "credit_hours": ev.credit_hours,
        },
        "classes": [
            {
                "name": s.label,
                "times": [_interval_to_dict(t) for t in s.times],
            }
            for s in ev.sections
        ],
    }


def schedules_payload(evaluated: Sequence[EvaluatedSchedule]) -> Dict[str, Any]:
    return {"schedules": [schedule_to_dict(ev) for ev in evaluated]}


def write_schedules_json(path: str | Path, evaluated: Sequence[EvaluatedSchedule]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(schedules_payload(evaluated), indent=2, allow_nan=False), encoding="utf-8")


def write_schedules_js(path: str | Path, evaluated: Sequence[EvaluatedSchedule]) -> None:
    """
    Writes the script form loaded by the schedule viewer:
    let schedules = JSON.parse("...")
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(schedules_payload(evaluated), allow_nan=False)
    p.write_text(f"let schedules = JSON.parse({json.dumps(payload)})\n", encoding="utf-8")


def write_schedules(path: str | Path, evaluated: Sequence[EvaluatedSchedule]) -> None:
    if Path(path).suffix.lower() == ".js":
        write_schedules_js(path, evaluated)
    else:
        write_schedules_json(path, evaluated)
