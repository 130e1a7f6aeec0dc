"""
Reader for Banner "Search Results" pages (the class search export).

The page holds one <table class="datadisplaytable">. Each course row uses a
fixed column layout; a section meeting at more than one time continues on
the following rows, which carry a time but no title.
"""
from __future__ import annotations

import logging
from html.parser import HTMLParser
from pathlib import Path
from typing import Dict, List, Optional

from .errors import SectionParseError
from .io import build_catalog
from .models import Course, CourseKey, Section, TimeInterval
from .timeparse import meeting_intervals, parse_days, parse_meeting_time

logger = logging.getLogger(__name__)

NBSP = "\xa0"

DEPT_INDEX = 2
COURSE_INDEX = 3
SEC_INDEX = 4
CRED_INDEX = 6
TITLE_INDEX = 7
DAYS_INDEX = 8
TIME_INDEX = 9

MIN_COLUMNS = TIME_INDEX + 1

Row = List[Optional[str]]


class _TableRowParser(HTMLParser):
    """
    Collects the <td> cells of every row of the first datadisplaytable.
    A cell's value is the text that comes before any nested element (its
    immediate inner text); blank and &nbsp;-only cells read as None.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.found_table = False
        self.rows: List[Row] = []
        self._table_depth = 0     # >0 while inside the target table
        self._row: Optional[Row] = None
        self._cell: Optional[List[str]] = None
        self._cell_closed_to_text = False

    def handle_starttag(self, tag, attrs):
        if tag == "table":
            if self._table_depth:
                self._table_depth += 1
                return
            classes = (dict(attrs).get("class") or "").split()
            if not self.found_table and "datadisplaytable" in classes:
                self.found_table = True
                self._table_depth = 1
            return

        if self._table_depth != 1:
            return

        if tag == "tr":
            self._row = []
        elif tag in ("td", "th") and self._row is not None:
            self._cell = [] if tag == "td" else None
            self._cell_closed_to_text = False
        elif self._cell is not None:
            # first nested element ends the immediate text
            self._cell_closed_to_text = True

    def handle_endtag(self, tag):
        if tag == "table" and self._table_depth:
            self._table_depth -= 1
            return
        if self._table_depth != 1:
            return

        if tag == "td" and self._row is not None:
            if self._cell is not None:
                text = "".join(self._cell).strip(" \t\r\n" + NBSP)
                self._row.append(text or None)
            self._cell = None
        elif tag == "tr" and self._row is not None:
            self.rows.append(self._row)
            self._row = None

    def handle_data(self, data):
        if self._table_depth == 1 and self._cell is not None and not self._cell_closed_to_text:
            self._cell.append(data)


def _row_times(row: Row) -> Optional[List[TimeInterval]]:
    days = row[DAYS_INDEX]
    time_raw = row[TIME_INDEX]
    if not days or not time_raw or time_raw.upper() == "TBA":
        return None

    parsed = parse_meeting_time(time_raw)
    if parsed is None:
        return None
    try:
        return meeting_intervals(parse_days(days), parsed[0], parsed[1])
    except ValueError as e:
        logger.warning("Ignoring meeting %s %s: %s", days, time_raw, e)
        return None


def _continuation_times(row: Row) -> Optional[List[TimeInterval]]:
    # Continuation rows carry a time but no title; None for anything else.
    if len(row) < MIN_COLUMNS or row[TITLE_INDEX] is not None:
        return None
    return _row_times(row)


def _section_number(raw: Optional[str]) -> str:
    # 'T1' / 'G2' style prefixes mark special sections; the number is what follows.
    digits = "".join(c for c in (raw or "") if c not in ("T", "G"))
    try:
        return str(int(digits))
    except ValueError:
        raise SectionParseError(f"Couldn't parse section number {raw!r}") from None


def _credits(raw: Optional[str]) -> int:
    whole = (raw or "").split(".")[0].strip()
    try:
        return int(whole)
    except ValueError:
        raise SectionParseError(f"Couldn't parse credits {raw!r}") from None


def parse_banner_html(text: str) -> Dict[CourseKey, Course]:
    parser = _TableRowParser()
    parser.feed(text)
    parser.close()
    if not parser.found_table:
        raise SectionParseError('Couldn\'t find <table class="datadisplaytable">')

    rows = parser.rows
    sections: List[Section] = []

    i = 0
    while i < len(rows):
        row = rows[i]
        if not row:
            # header row (th cells only)
            i += 1
            continue
        if len(row) < MIN_COLUMNS:
            logger.debug("Skipping short row %d (%d cells)", i, len(row))
            i += 1
            continue

        title = row[TITLE_INDEX]
        course_raw = row[COURSE_INDEX]
        if title is None and course_raw is None:
            logger.debug("Skipping orphan continuation row %d", i)
            i += 1
            continue
        if not course_raw or not course_raw.strip().isdigit():
            raise SectionParseError(f"Couldn't parse course number {course_raw!r} in row {i}")

        times = _row_times(row)
        if times is None:
            logger.info("Skipping %r at row %d: no meeting time", title, i)
            i += 1
            continue

        while i + 1 < len(rows):
            extra = _continuation_times(rows[i + 1])
            if extra is None:
                break
            times.extend(extra)
            i += 1

        sections.append(
            Section(
                course_name=title or "",
                dept=(row[DEPT_INDEX] or "").strip(),
                course_num=course_raw.strip(),
                section_num=_section_number(row[SEC_INDEX]),
                credits=_credits(row[CRED_INDEX]),
                times=tuple(times),
            )
        )
        i += 1

    logger.info("Read %d timed sections from Banner results", len(sections))
    return build_catalog(sections)


def load_banner_html(path: str | Path) -> Dict[CourseKey, Course]:
    return parse_banner_html(Path(path).read_text(encoding="utf-8"))
