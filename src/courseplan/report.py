from __future__ import annotations

from typing import Dict, Sequence

from .models import EvaluatedSchedule, TimeInterval
from .scorer import ScoreConfig


def fmt_time(mins: int) -> str:
    """
    Convert minutes since midnight to a human-readable time like '2:05pm'.
    """
    mins = int(mins)
    h24 = mins // 60
    m = mins % 60
    ampm = "am" if h24 < 12 else "pm"
    h12 = h24 % 12
    if h12 == 0:
        h12 = 12
    return f"{h12}:{m:02d}{ampm}"


def fmt_interval(t: TimeInterval) -> str:
    return f"{t.day.code} {fmt_time(t.start_min)}-{fmt_time(t.end_min)}"


def fmt_score(score: float) -> str:
    return "-inf" if score == float("-inf") else f"{score:.2f}"


def print_results_table(
    results: Sequence[EvaluatedSchedule],
    cfg: ScoreConfig,
    title: str,
    prompts: Dict[str, object],
    explain_top: int = 3,
) -> None:
    """
    Print a ranked table of schedules, then break down the score of the top few.
    """
    print("\n" + "=" * 110)
    print(f"SCHEDULES: {title}")
    print("-" * 110)
    print("Inputs:")
    for key, value in prompts.items():
        print(f"  {key}: {value}")
    print("=" * 110)
    print(f"{'RANK':<5} {'SECTIONS':<52} {'CR':>3} {'START':>5} {'DT':>3} "
          f"{'IDLE':>5} {'TRIPS':>5} {'TRIP MIN':>8} {'SCORE':>9}")
    print("-" * 110)

    for i, r in enumerate(results, start=1):
        labels = ", ".join(s.label for s in r.sections)
        if len(labels) > 52:
            labels = labels[:49] + "..."
        print(f"{i:<5} {labels:<52} {r.credit_hours:>3d} {r.start_hour:>5d} {r.start_time_deviation:>3d} "
              f"{r.idle_minutes:>5d} {r.trip_count:>5d} {r.trip_minutes:>8d} {fmt_score(r.score):>9}")

    print("=" * 110)

    # Explainability: show WHY the top few were ranked that way
    explain_top_n = min(explain_top, len(results))
    if explain_top_n > 0:
        print("\nExplainability (top results):")
        for i in range(explain_top_n):
            r = results[i]
            print(f"\n#{i+1}: score {fmt_score(r.score)}")
            for s in r.sections:
                times = "; ".join(fmt_interval(t) for t in s.times)
                print(f"  {s.label:<40} {s.credits} cr  {times}")
            if not r.feasible:
                print(f"  Infeasible: {r.credit_hours} credit hours outside "
                      f"{cfg.min_credits}-{cfg.max_credits}")
                continue
            print(f"  First class at {r.start_hour}:00 -> {r.start_time_deviation} h from {cfg.ideal_start_hour}:00")
            print(f"  Idle between classes: {r.idle_minutes} min")
            print(f"  Trips home: {r.trip_count} ({r.trip_minutes} min)")
            print(f"  Final score: {fmt_score(r.score)} = "
                  f"-{r.start_time_deviation} - {r.idle_minutes} "
                  f"- {cfg.trip_penalty:g}*{r.trip_count} - {r.trip_minutes}/{cfg.trip_minutes_divisor:g}")
