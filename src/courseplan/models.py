from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

MINUTES_PER_DAY = 24 * 60


class Day(IntEnum):
    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4

    @property
    def code(self) -> str:
        return DAY_CODES[self.value]

    @classmethod
    def from_code(cls, code: str) -> "Day":
        try:
            return cls(DAY_CODES.index(code))
        except ValueError:
            raise ValueError(f"Unknown day code: {code!r}") from None


DAY_CODES = ("M", "T", "W", "R", "F")


@dataclass(frozen=True)
class TimeInterval:
    day: Day
    start_min: int     # minutes since midnight
    duration_min: int

    def __post_init__(self) -> None:
        if not 0 <= self.start_min < MINUTES_PER_DAY:
            raise ValueError(f"start_min out of range: {self.start_min}")
        if self.duration_min <= 0:
            raise ValueError(f"duration_min must be positive: {self.duration_min}")
        if self.start_min + self.duration_min > MINUTES_PER_DAY:
            raise ValueError("interval crosses midnight")

    @property
    def end_min(self) -> int:
        return self.start_min + self.duration_min

    @property
    def start_hour(self) -> int:
        return self.start_min // 60

    @property
    def start_minute(self) -> int:
        return self.start_min % 60

    def intersects(self, other: "TimeInterval") -> bool:
        return intersects(self, other)

    def __str__(self) -> str:
        return f"{self.day.code} at {self.start_hour}:{self.start_minute:02d} for {self.duration_min} mins"


def intersects(a: TimeInterval, b: TimeInterval) -> bool:
    """
    Closed-interval overlap test: two meetings on the same day where one ends
    exactly when the other begins are reported as intersecting.
    """
    if a.day != b.day:
        return False
    return not (a.end_min < b.start_min or b.end_min < a.start_min)


@dataclass(frozen=True)
class Section:
    course_name: str
    dept: str
    course_num: str
    section_num: str
    credits: int
    times: Tuple[TimeInterval, ...]

    @property
    def label(self) -> str:
        return f"{self.dept}-{self.course_name}-{self.section_num}"

    @property
    def course_key(self) -> Tuple[str, str]:
        return (self.dept, self.course_num)

    def conflicts_with(self, other: "Section") -> bool:
        return sections_conflict(self, other)


def sections_conflict(s1: Section, s2: Section) -> bool:
    for t1 in s1.times:
        for t2 in s2.times:
            if intersects(t1, t2):
                return True
    return False


@dataclass(frozen=True)
class Course:
    name: str
    dept: str
    number: str
    sections: Tuple[Section, ...]

    @property
    def key(self) -> Tuple[str, str]:
        return (self.dept, self.number)


CourseKey = Tuple[str, str]

# One section per required course, in course order.
Schedule = Tuple[Section, ...]


@dataclass(frozen=True)
class EvaluatedSchedule:
    sections: Schedule
    credit_hours: int
    start_hour: int             # earliest class hour across the week
    start_time_deviation: int   # |start_hour - ideal|, in hours
    idle_minutes: int
    trip_count: int
    trip_minutes: int
    score: float

    @property
    def metrics(self) -> Tuple[int, int, int, int]:
        return (
            self.start_time_deviation,
            self.idle_minutes,
            self.trip_count,
            self.trip_minutes,
        )

    @property
    def feasible(self) -> bool:
        return self.score != float("-inf")
