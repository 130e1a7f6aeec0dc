# UCI WebSoc (via Anteater API) as a course catalog source
from .scraper import fetch_course_catalog, to_course_catalog, to_sections, build_websoc_options
from .anteater import fetch_websoc_from_anteater
from .terms import get_current_term, term_to_year_quarter

__all__ = [
    "fetch_course_catalog",
    "to_course_catalog",
    "to_sections",
    "build_websoc_options",
    "fetch_websoc_from_anteater",
    "get_current_term",
    "term_to_year_quarter",
]
