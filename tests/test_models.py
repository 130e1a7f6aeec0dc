import pytest

from courseplan.models import Day, TimeInterval, intersects, sections_conflict

from conftest import make_section


def interval(day, hour, minute, length):
    return TimeInterval(Day(day), hour * 60 + minute, length)


def test_same_interval_intersects():
    t1 = interval(0, 1, 30, 60)
    t2 = interval(0, 1, 30, 60)
    assert intersects(t1, t2)
    assert intersects(t2, t1)


def test_partial_overlap_is_symmetric():
    a = interval(0, 1, 30, 60)   # 1:30 - 2:30
    b = interval(0, 2, 29, 60)   # 2:29 - 3:29
    assert intersects(a, b)
    assert intersects(b, a)


def test_touching_endpoints_intersect():
    a = interval(0, 1, 30, 60)   # 1:30 - 2:30
    b = interval(0, 2, 30, 60)   # 2:30 - 3:30
    assert intersects(a, b)
    assert intersects(b, a)
    assert a.intersects(b)


def test_one_minute_apart_does_not_intersect():
    a = interval(2, 9, 0, 50)    # 9:00 - 9:50
    b = interval(2, 9, 51, 50)
    assert not intersects(a, b)
    assert not intersects(b, a)


def test_different_days_never_intersect():
    a = interval(0, 9, 0, 120)
    b = interval(1, 9, 0, 120)
    assert not intersects(a, b)
    assert not intersects(b, a)


def test_derived_fields():
    t = interval(4, 14, 5, 75)
    assert t.end_min == 14 * 60 + 80
    assert t.start_hour == 14
    assert t.start_minute == 5
    assert t.day.code == "F"
    assert str(t) == "F at 14:05 for 75 mins"


@pytest.mark.parametrize("start,length", [(-1, 10), (1440, 10), (600, 0), (600, -5), (1400, 41)])
def test_invalid_interval_rejected(start, length):
    with pytest.raises(ValueError):
        TimeInterval(Day.MON, start, length)


def test_interval_may_end_at_midnight():
    t = TimeInterval(Day.MON, 1380, 60)
    assert t.end_min == 1440


def test_day_codes():
    assert Day.from_code("R") is Day.THU
    assert [d.code for d in Day] == ["M", "T", "W", "R", "F"]
    with pytest.raises(ValueError):
        Day.from_code("S")


def test_sections_conflict_on_any_pair():
    s1 = make_section(times=[(0, 9, 0, 50), (2, 9, 0, 50)])
    s2 = make_section(num="1100", times=[(1, 9, 0, 50), (2, 9, 30, 50)])
    s3 = make_section(num="1200", times=[(1, 11, 0, 50), (3, 9, 0, 50)])
    assert sections_conflict(s1, s2)
    assert s2.conflicts_with(s1)
    assert not sections_conflict(s1, s3)


def test_section_label_and_key():
    s = make_section("CSCI", "1200", "3", name="DATA STRUCTURES")
    assert s.label == "CSCI-DATA STRUCTURES-3"
    assert s.course_key == ("CSCI", "1200")
