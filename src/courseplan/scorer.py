# src/courseplan/scorer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

from .errors import DataConsistencyError
from .models import Day, EvaluatedSchedule, Schedule, TimeInterval


@dataclass(frozen=True)
class ScoreConfig:
    # Feasibility
    min_credits: int = 16
    max_credits: int = 20

    # Day shape
    ideal_start_hour: int = 12
    trip_threshold_min: int = 120      # gaps this long or longer mean going home
    passing_gap_min: int = 10          # normal walk between classes, not idle time

    # Scoring weights
    trip_penalty: float = 20.0
    trip_minutes_divisor: float = 100.0

    def __post_init__(self) -> None:
        if self.min_credits > self.max_credits:
            raise ValueError(
                f"min_credits ({self.min_credits}) is greater than max_credits ({self.max_credits})"
            )
        if self.trip_threshold_min <= 0:
            raise ValueError("trip_threshold_min must be positive")
        if self.trip_minutes_divisor <= 0:
            raise ValueError("trip_minutes_divisor must be positive")


@dataclass(frozen=True)
class GapAnalysis:
    idle_minutes: int
    trip_count: int
    trip_minutes: int


def credit_hours(schedule: Schedule) -> int:
    return sum(s.credits for s in schedule)


def schedule_start_hour(schedule: Schedule) -> int:
    """
    Earliest class hour of the week: each section contributes the hour of its
    earliest meeting, and the schedule takes the smallest of those.
    """
    hours = []
    for section in schedule:
        if not section.times:
            raise DataConsistencyError(f"Section {section.label} has no meeting times")
        hours.append(min(t.start_hour for t in section.times))
    return min(hours)


def _partition_by_day(schedule: Schedule) -> Dict[Day, List[TimeInterval]]:
    days: Dict[Day, List[TimeInterval]] = {}
    for section in schedule:
        for t in section.times:
            days.setdefault(t.day, []).append(t)
    return days


def analyze_gaps(schedule: Schedule, cfg: ScoreConfig) -> GapAnalysis:
    """
    Walks each day's meetings in start order and classifies the gap between
    every consecutive pair:
      - shorter than cfg.trip_threshold_min: idle time, unless it is exactly
        cfg.passing_gap_min
      - cfg.trip_threshold_min or longer: a trip home (counted, and its
        minutes summed separately)
    A gap of zero or less means two meetings touch or overlap, which
    conflict-free schedules never contain.
    """
    idle = 0
    trips = 0
    trip_minutes = 0

    for day, meetings in _partition_by_day(schedule).items():
        meetings.sort(key=lambda t: (t.start_min, t.end_min))
        for first, second in zip(meetings, meetings[1:]):
            gap = second.start_min - first.end_min
            if gap <= 0:
                raise DataConsistencyError(
                    f"Meetings {first} and {second} leave a non-positive gap ({gap} min) on {day.name}"
                )

            if gap < cfg.trip_threshold_min:
                if gap != cfg.passing_gap_min:
                    idle += gap
            else:
                trips += 1
                trip_minutes += gap

    return GapAnalysis(idle_minutes=idle, trip_count=trips, trip_minutes=trip_minutes)


def composite_score(deviation: int, gaps: GapAnalysis, cfg: ScoreConfig) -> float:
    """
    Higher is better. The start-hour deviation is in hours while the gap terms
    are in minutes; the weights are kept as-is so rankings stay comparable
    across runs.
    """
    return (
        0.0
        - float(deviation)
        - float(gaps.idle_minutes)
        - cfg.trip_penalty * gaps.trip_count
        - gaps.trip_minutes / cfg.trip_minutes_divisor
    )


def evaluate_schedule(schedule: Schedule, cfg: ScoreConfig) -> EvaluatedSchedule:
    credits = credit_hours(schedule)
    start_hour = schedule_start_hour(schedule)
    gaps = analyze_gaps(schedule, cfg)

    deviation = abs(start_hour - cfg.ideal_start_hour)
    score = composite_score(deviation, gaps, cfg)

    # Infeasible load: keep the schedule but sink it below every feasible one.
    if credits < cfg.min_credits or credits > cfg.max_credits:
        score = float("-inf")

    return EvaluatedSchedule(
        sections=tuple(schedule),
        credit_hours=credits,
        start_hour=start_hour,
        start_time_deviation=deviation,
        idle_minutes=gaps.idle_minutes,
        trip_count=gaps.trip_count,
        trip_minutes=gaps.trip_minutes,
        score=score,
    )


def rank_schedules(schedules: Iterable[Schedule], cfg: ScoreConfig) -> List[EvaluatedSchedule]:
    """
    Evaluate every schedule and sort by score, best first. The sort is stable,
    so equal scores keep enumeration order.
    """
    ranked = [evaluate_schedule(s, cfg) for s in schedules]
    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked
