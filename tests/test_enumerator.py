import itertools

from courseplan.enumerator import conflicts_with_any, enumerate_schedules, iter_schedules
from courseplan.models import sections_conflict

from conftest import make_course, make_section


def _disjoint_course(dept, count, day):
    # `count` sections of one course, each at a different hour of `day`
    return make_course(dept, "100", [
        make_section(dept, "100", str(i + 1), 4, [(day, 8 + i, 0, 50)]) for i in range(count)
    ])


def test_unconstrained_count_is_product():
    courses = [_disjoint_course("A", 3, 0), _disjoint_course("B", 2, 1), _disjoint_course("C", 4, 2)]
    schedules = enumerate_schedules(courses)
    assert len(schedules) == 3 * 2 * 4
    assert len(set(schedules)) == len(schedules)


def test_one_section_per_course_in_course_order():
    courses = [_disjoint_course("A", 2, 0), _disjoint_course("B", 2, 1)]
    for schedule in enumerate_schedules(courses):
        assert [s.dept for s in schedule] == ["A", "B"]


def test_order_follows_sections():
    courses = [_disjoint_course("A", 2, 0), _disjoint_course("B", 2, 1)]
    labels = [tuple(s.section_num for s in sch) for sch in enumerate_schedules(courses)]
    assert labels == [("1", "1"), ("1", "2"), ("2", "1"), ("2", "2")]


def test_conflicting_sections_are_pruned():
    a = make_course("A", "1", [
        make_section("A", "1", "1", 4, [(0, 9, 0, 50)]),
        make_section("A", "1", "2", 4, [(0, 10, 0, 50)]),
    ])
    b = make_course("B", "1", [
        make_section("B", "1", "1", 4, [(0, 9, 30, 50)]),   # clashes with both A sections
        make_section("B", "1", "2", 4, [(0, 13, 0, 50)]),
    ])
    c = make_course("C", "1", [
        make_section("C", "1", "1", 4, [(0, 13, 50, 30)]),  # touches B-2
        make_section("C", "1", "2", 4, [(1, 9, 0, 50)]),
    ])
    schedules = enumerate_schedules([a, b, c])
    got = {tuple(s.section_num for s in sch) for sch in schedules}
    assert got == {("1", "2", "2"), ("2", "2", "2")}

    for sch in schedules:
        for x, y in itertools.combinations(sch, 2):
            assert not sections_conflict(x, y)


def test_no_courses_yields_nothing():
    assert enumerate_schedules([]) == []


def test_course_without_sections_yields_nothing():
    courses = [_disjoint_course("A", 2, 0), make_course("B", "1", []), _disjoint_course("C", 2, 2)]
    assert enumerate_schedules(courses) == []


def test_single_course():
    schedules = enumerate_schedules([_disjoint_course("A", 3, 0)])
    assert len(schedules) == 3
    assert all(len(s) == 1 for s in schedules)


def test_many_courses_do_not_hit_recursion_limit():
    # one section each, every course on its own time slot
    courses = [
        make_course("X", str(i), [make_section("X", str(i), "1", 1, [(i % 5, 0, 2 * (i // 5), 1)])])
        for i in range(1200)
    ]
    schedules = list(iter_schedules(courses))
    assert len(schedules) == 1
    assert len(schedules[0]) == 1200


def test_conflicts_with_any():
    s = make_section(times=[(0, 9, 0, 50)])
    assert conflicts_with_any(s, [make_section(num="2", times=[(0, 9, 50, 10)])])
    assert not conflicts_with_any(s, [make_section(num="2", times=[(1, 9, 0, 50)])])
    assert not conflicts_with_any(s, [])
