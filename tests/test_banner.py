import logging

import pytest

from courseplan.banner import load_banner_html, parse_banner_html
from courseplan.errors import SectionParseError
from courseplan.models import Day


def row(dept, course, sec, credits, title, days, time):
    # 0 select, 1 CRN, 2 dept, 3 course, 4 section, 5 campus, 6 credits,
    # 7 title, 8 days, 9 time, then the remaining columns Banner prints
    cells = ["&nbsp;", "41234", dept, course, sec, "T", credits, title, days, time]
    cells += ["&nbsp;"] * 10
    return "<tr>" + "".join(f'<td class="dddefault">{c}</td>' for c in cells) + "</tr>"


def page(*rows):
    header = "<tr>" + "".join(f'<th class="ddheader">{h}</th>' for h in ["Select", "CRN", "Subj"]) + "</tr>"
    return (
        "<html><body>"
        '<table class="datadisplaytable" summary="Sections">'
        '<tr><th colspan="26" class="ddtitle">Mathematical Sciences</th></tr>'
        + header
        + "".join(rows)
        + "</table></body></html>"
    )


def test_parse_rows_into_catalog():
    html = page(
        row("MATH", "1010", "01", "4.000", "CALCULUS I", "MR", "10:00 am-11:50 am"),
        row("MATH", "1010", "02", "4.000", "CALCULUS I", "TF", "02:00 pm-03:50 pm"),
        row("PHYS", "1100", "T3", "4.000", "PHYSICS I", "MR", "12:00 pm-01:50 pm"),
    )
    catalog = parse_banner_html(html)
    assert set(catalog) == {("MATH", "1010"), ("PHYS", "1100")}

    math = catalog[("MATH", "1010")]
    assert math.name == "CALCULUS I"
    assert [s.section_num for s in math.sections] == ["1", "2"]
    first = math.sections[0]
    assert first.credits == 4
    assert [(t.day, t.start_min, t.duration_min) for t in first.times] == [
        (Day.MON, 600, 110),
        (Day.THU, 600, 110),
    ]
    assert catalog[("PHYS", "1100")].sections[0].section_num == "3"


def test_continuation_rows_extend_previous_section():
    cont = row("&nbsp;", "&nbsp;", "&nbsp;", "&nbsp;", "&nbsp;", "W", "04:00 pm-05:50 pm")
    html = page(
        row("CSCI", "1200", "01", "4.000", "DATA STRUCTURES", "MR", "12:00 pm-01:50 pm"),
        cont,
        row("CSCI", "1200", "02", "4.000", "DATA STRUCTURES", "TF", "12:00 pm-01:50 pm"),
    )
    sections = parse_banner_html(html)[("CSCI", "1200")].sections
    assert len(sections) == 2
    assert [t.day for t in sections[0].times] == [Day.MON, Day.THU, Day.WED]
    assert sections[0].times[-1].start_min == 16 * 60
    assert len(sections[1].times) == 2


def test_rows_without_time_are_skipped():
    html = page(
        row("PSYC", "1200", "01", "4.000", "GENERAL PSYCHOLOGY", "&nbsp;", "<abbr>TBA</abbr>"),
        row("PSYC", "1200", "02", "4.000", "GENERAL PSYCHOLOGY", "TF", "10:00 am-11:50 am"),
    )
    sections = parse_banner_html(html)[("PSYC", "1200")].sections
    assert [s.section_num for s in sections] == ["2"]


def test_bad_course_number_is_fatal():
    html = page(row("MATH", "ABCD", "01", "4.000", "CALCULUS I", "MR", "10:00 am-11:50 am"))
    with pytest.raises(SectionParseError):
        parse_banner_html(html)


def test_missing_table_is_fatal():
    with pytest.raises(SectionParseError):
        parse_banner_html("<html><body><table><tr><td>x</td></tr></table></body></html>")


def test_nested_tables_are_ignored():
    html = page(
        row("MATH", "1010", "01", "4.000", "CALCULUS I", "MR", "10:00 am-11:50 am"),
        '<tr><td colspan="20"><table><tr><td>note</td></tr></table></td></tr>',
    )
    assert len(parse_banner_html(html)[("MATH", "1010")].sections) == 1


def test_load_banner_html(tmp_path):
    p = tmp_path / "Search Results.html"
    p.write_text(page(row("MATH", "1010", "01", "4.000", "CALCULUS I", "MR", "10:00 am-11:50 am")),
                 encoding="utf-8")
    assert ("MATH", "1010") in load_banner_html(p)


def test_bad_continuation_row_warns_once(caplog):
    weekend = row("&nbsp;", "&nbsp;", "&nbsp;", "&nbsp;", "&nbsp;", "Sa", "10:00 am-11:50 am")
    html = page(
        row("MATH", "1010", "01", "4.000", "CALCULUS I", "MR", "10:00 am-11:50 am"),
        weekend,
    )
    with caplog.at_level(logging.WARNING, logger="courseplan.banner"):
        sections = parse_banner_html(html)[("MATH", "1010")].sections
    assert [t.day for t in sections[0].times] == [Day.MON, Day.THU]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "Weekend" in warnings[0].getMessage()
