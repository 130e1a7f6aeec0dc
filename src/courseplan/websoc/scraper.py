import logging
import re

from ..io import build_catalog
from ..models import Section
from ..timeparse import TBA_LIKE, meeting_intervals, parse_days, parse_meeting_time
from .anteater import SEARCH_KEYS

logger = logging.getLogger(__name__)

UNITS_RE = re.compile(r"^\s*(\d+)")


def _str(x):
    if x is None:
        return ""
    if isinstance(x, list):
        return " ".join(_str(i) for i in x)
    return str(x).strip()


def _units(raw: str) -> int:
    # '4', '4.0', '1-4' (variable units: take the low end)
    m = UNITS_RE.match(raw)
    return int(m.group(1)) if m else 0


def _meeting_times(meeting: dict):
    days_raw = _str(meeting.get("days"))
    time_raw = _str(meeting.get("time"))
    if not days_raw or days_raw.upper() in TBA_LIKE:
        return None
    parsed = parse_meeting_time(time_raw)
    if parsed is None:
        return None
    try:
        return meeting_intervals(parse_days(days_raw), parsed[0], parsed[1])
    except ValueError as e:
        logger.warning("Ignoring meeting %s %s: %s", days_raw, time_raw, e)
        return None


def _primary_type(sections: list) -> str:
    # Lectures carry the units; otherwise the course's first listed type.
    types = [_str(s.get("sectionType")) for s in sections]
    if "Lec" in types:
        return "Lec"
    return types[0] if types else ""


def to_sections(api_response: dict) -> list:
    """
    Flattens the schools -> departments -> courses -> sections tree into
    Section records. Only sections of the course's primary type are kept
    (lectures when it has any), since a schedule takes one section per
    course. A section with no meetings, or with any meeting that has no
    usable day/time, is left out.
    """
    sections = []
    schools = (api_response or {}).get("schools") or []

    for school in schools:
        for dept in school.get("departments") or []:
            dept_code = _str(dept.get("deptCode")).upper()
            for course in dept.get("courses") or []:
                course_num = _str(course.get("courseNumber")).upper()
                course_title = _str(course.get("courseTitle"))
                course_sections = course.get("sections") or []
                primary = _primary_type(course_sections)

                for section in course_sections:
                    label = f"{dept_code} {course_num} {_str(section.get('sectionCode'))}"
                    section_type = _str(section.get("sectionType"))
                    if section_type != primary:
                        logger.debug("Skipping %s: %s section, course is chosen by %s",
                                     label, section_type or "untyped", primary or "untyped")
                        continue

                    meetings = section.get("meetings") or []
                    if not meetings:
                        logger.info("Skipping %s: no meetings", label)
                        continue

                    times = []
                    for meeting in meetings:
                        parsed = _meeting_times(meeting)
                        if parsed is None:
                            times = None
                            break
                        times.extend(parsed)
                    if not times:
                        logger.info("Skipping %s: TBA or unparseable meeting time", label)
                        continue

                    sections.append(
                        Section(
                            course_name=course_title,
                            dept=dept_code,
                            course_num=course_num,
                            section_num=_str(section.get("sectionNum")) or _str(section.get("sectionCode")),
                            credits=_units(_str(section.get("units"))),
                            times=tuple(times),
                        )
                    )

    return sections


def to_course_catalog(api_response: dict) -> dict:
    return build_catalog(to_sections(api_response))


def build_websoc_options(opts: dict) -> dict:
    options = {"term": opts.get("term")}
    for key in SEARCH_KEYS:
        val = opts.get(key)
        if val is not None and val != "":
            options[key] = val
    return options


def fetch_course_catalog(search_options: dict) -> dict:
    from . import anteater

    term = search_options.get("term")
    if not term:
        raise ValueError("search_options['term'] is required")

    options = build_websoc_options(search_options)
    if not any(options.get(k) for k in ("department", "ge", "instructorName", "sectionCodes")):
        raise ValueError("At least one of department, ge, instructorName, or sectionCodes is required")

    raw = anteater.fetch_websoc_from_anteater(options)
    return to_course_catalog(raw)
