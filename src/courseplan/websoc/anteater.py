import logging

import requests

from .terms import term_to_year_quarter

BASE = "https://anteaterapi.com/v2/rest/websoc"
TIMEOUT_SEC = 30

SEARCH_KEYS = (
    "department", "ge", "instructorName", "courseNumber", "courseTitle",
    "sectionCodes", "days", "building", "room", "division", "sectionType",
    "startTime", "endTime", "fullCourses", "cancelledCourses",
)

logger = logging.getLogger(__name__)


def fetch_websoc_from_anteater(search_options: dict) -> dict:
    parsed = term_to_year_quarter(search_options.get("term", ""))
    if not parsed:
        raise ValueError("term must be like '2025 Fall' or '2024 Winter'")

    params = {"year": parsed["year"], "quarter": parsed["quarter"]}
    for key in SEARCH_KEYS:
        val = search_options.get(key)
        if val is not None and val != "":
            params[key] = val

    logger.info("Fetching WebSoc listing %s", params)
    r = requests.get(BASE, params=params, timeout=TIMEOUT_SEC)
    r.raise_for_status()
    data = r.json()
    if not data.get("ok") or "data" not in data:
        raise RuntimeError("Anteater API returned unexpected shape")
    schools = data.get("data", {}).get("schools") or []
    return {"schools": schools}
