import pytest

from courseplan.models import Course, Day, Section, TimeInterval


def make_section(dept="MATH", num="1010", sec="1", credits=4, times=(), name=None):
    """times: iterable of (day, start_hour, start_minute, length_minutes)"""
    return Section(
        course_name=name or f"{dept} {num}",
        dept=dept,
        course_num=num,
        section_num=sec,
        credits=credits,
        times=tuple(TimeInterval(Day(d), h * 60 + m, length) for d, h, m, length in times),
    )


def make_course(dept, num, sections):
    return Course(name=f"{dept} {num}", dept=dept, number=num, sections=tuple(sections))


@pytest.fixture
def tradeoff_catalog():
    """
    MATH-1010 has two 1-credit sections, Monday 9:00 and Monday 14:00.
    The other three courses each have one section, PSYC on Monday 12:00.
    Both full schedules carry 18 credits.
    """
    math = make_course("MATH", "1010", [
        make_section("MATH", "1010", "1", 1, [(0, 9, 0, 50)]),
        make_section("MATH", "1010", "2", 1, [(0, 14, 0, 50)]),
    ])
    phys = make_course("PHYS", "1100", [make_section("PHYS", "1100", "1", 5, [(1, 12, 0, 50)])])
    csci = make_course("CSCI", "1200", [make_section("CSCI", "1200", "1", 6, [(2, 12, 0, 50)])])
    psyc = make_course("PSYC", "1200", [make_section("PSYC", "1200", "1", 6, [(0, 12, 0, 50)])])
    return {c.key: c for c in (math, phys, csci, psyc)}


REQUIRED = [("MATH", "1010"), ("PHYS", "1100"), ("CSCI", "1200"), ("PSYC", "1200")]
