# Conflict-free schedule search, scoring and Pareto pruning
from .models import Course, Day, EvaluatedSchedule, Schedule, Section, TimeInterval, intersects, sections_conflict
from .enumerator import enumerate_schedules, iter_schedules
from .scorer import ScoreConfig, analyze_gaps, evaluate_schedule, rank_schedules
from .pareto import dominates, prune_dominated
from .planner import parse_course_key, plan_schedules, select_courses
from .errors import CourseplanError, DataConsistencyError, MissingCourseError, SectionParseError

__all__ = [
    "Course",
    "Day",
    "EvaluatedSchedule",
    "Schedule",
    "Section",
    "TimeInterval",
    "intersects",
    "sections_conflict",
    "enumerate_schedules",
    "iter_schedules",
    "ScoreConfig",
    "analyze_gaps",
    "evaluate_schedule",
    "rank_schedules",
    "dominates",
    "prune_dominated",
    "parse_course_key",
    "plan_schedules",
    "select_courses",
    "CourseplanError",
    "DataConsistencyError",
    "MissingCourseError",
    "SectionParseError",
]
