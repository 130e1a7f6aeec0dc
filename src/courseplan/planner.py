from __future__ import annotations

import logging
import re
from typing import List, Mapping, Optional, Sequence

from .enumerator import enumerate_schedules
from .errors import DataConsistencyError, MissingCourseError
from .models import Course, CourseKey, EvaluatedSchedule
from .pareto import prune_dominated
from .scorer import ScoreConfig, rank_schedules

logger = logging.getLogger(__name__)

COURSE_KEY_RE = re.compile(r"^\s*(?P<dept>.+?)[\s\-]+(?P<num>[0-9A-Za-z]+)\s*$")


def parse_course_key(text: str) -> CourseKey:
    """
    'MATH-1010' -> ('MATH', '1010')
    'I&C SCI 33' -> ('I&C SCI', '33')
    """
    m = COURSE_KEY_RE.match(text or "")
    if not m:
        raise ValueError(f"Expected a course like 'MATH-1010', got {text!r}")
    return (m.group("dept").strip().upper(), m.group("num").upper())


def select_courses(catalog: Mapping[CourseKey, Course], required: Sequence[CourseKey]) -> List[Course]:
    """
    Look up every required course, in the order given. All missing keys are
    reported together.
    """
    missing = [key for key in required if key not in catalog]
    if missing:
        raise MissingCourseError(missing)

    courses = [catalog[key] for key in required]
    for course in courses:
        for section in course.sections:
            if not section.times:
                raise DataConsistencyError(f"Section {section.label} has no meeting times")
    return courses


def plan_schedules(
    catalog: Mapping[CourseKey, Course],
    required: Sequence[CourseKey],
    cfg: Optional[ScoreConfig] = None,
    prune: bool = True,
    top_k: Optional[int] = None,
) -> List[EvaluatedSchedule]:
    """
    End-to-end: select courses -> enumerate -> score -> sort desc -> prune
    dominated -> return the first top_k (all when top_k is None).
    """
    cfg = cfg or ScoreConfig()
    courses = select_courses(catalog, required)
    for course in courses:
        logger.debug("%s-%s: %d section(s)", course.dept, course.number, len(course.sections))

    schedules = enumerate_schedules(courses)
    logger.info("Generated %d schedules", len(schedules))

    ranked = rank_schedules(schedules, cfg)
    feasible = sum(1 for r in ranked if r.feasible)
    logger.info("%d of %d schedules within %d-%d credit hours",
                feasible, len(ranked), cfg.min_credits, cfg.max_credits)

    if prune:
        ranked = prune_dominated(ranked)

    if top_k is not None:
        ranked = ranked[:top_k]
    return ranked
