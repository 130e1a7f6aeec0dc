from __future__ import annotations

from typing import Iterator, List, Sequence

from .models import Course, Schedule, Section, sections_conflict


def conflicts_with_any(section: Section, chosen: Sequence[Section]) -> bool:
    for other in chosen:
        if sections_conflict(section, other):
            return True
    return False


def iter_schedules(courses: Sequence[Course]) -> Iterator[Schedule]:
    """
    Depth-first search yielding every schedule that takes exactly one section
    from each course (in course order) with no two sections conflicting.

    A branch is cut as soon as the section being tried conflicts with one
    already chosen. The search keeps its own stack of per-course cursors, so
    depth is bounded only by the number of courses, not the interpreter's
    recursion limit.

    An empty course list, or any course without sections, yields nothing.
    """
    if not courses:
        return

    last = len(courses) - 1
    chosen: List[Section] = []
    # cursors[d] = index of the next section to try for courses[d]
    # invariant: len(chosen) == len(cursors) - 1
    cursors: List[int] = [0]

    while cursors:
        depth = len(cursors) - 1
        sections = courses[depth].sections
        idx = cursors[-1]

        if idx >= len(sections):
            cursors.pop()
            if chosen:
                chosen.pop()
            continue

        cursors[-1] = idx + 1
        section = sections[idx]
        if conflicts_with_any(section, chosen):
            continue

        if depth == last:
            yield tuple(chosen) + (section,)
            continue

        chosen.append(section)
        cursors.append(0)


def enumerate_schedules(courses: Sequence[Course]) -> List[Schedule]:
    return list(iter_schedules(courses))
