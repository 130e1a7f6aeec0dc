#!/usr/bin/env python3
"""Build ranked, conflict-free schedules. Run as: courseplan (or python -m courseplan)."""
import argparse
import logging
import sys

from .banner import load_banner_html
from .errors import CourseplanError
from .io import load_sections_csv, write_schedules
from .planner import parse_course_key, plan_schedules
from .report import print_results_table
from .scorer import ScoreConfig
from .websoc import fetch_course_catalog, get_current_term

logger = logging.getLogger("courseplan")


def configure_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    root = logging.getLogger("courseplan")
    # Prevent duplicate handlers if main() runs more than once in a process
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Enumerate conflict-free schedules for a set of required courses and rank them"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--html", help='Banner search results page, e.g. "Search Results.html"')
    source.add_argument("--csv", help="section listing CSV")
    source.add_argument("--websoc-term", nargs="?", const=get_current_term(),
                        help='fetch from WebSoc, e.g. "2025 Fall" (current quarter when given no value)')
    parser.add_argument("--websoc-dept", action="append", default=[],
                        help="WebSoc department code (repeatable), e.g. I&C SCI")
    parser.add_argument("--course", "-c", action="append", required=True,
                        help="required course like MATH-1010 (repeatable)")
    parser.add_argument("--min-credits", type=int, default=ScoreConfig.min_credits)
    parser.add_argument("--max-credits", type=int, default=ScoreConfig.max_credits)
    parser.add_argument("--no-prune", action="store_true", help="keep dominated schedules")
    parser.add_argument("--top", type=int, help="only keep the best N schedules")
    parser.add_argument("--output", "-o", help="write schedules to .js (viewer) or .json")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def load_catalog(args):
    if args.html:
        return load_banner_html(args.html)
    if args.csv:
        return load_sections_csv(args.csv)

    if not args.websoc_dept:
        raise ValueError("--websoc-term needs at least one --websoc-dept")
    catalog = {}
    for dept in args.websoc_dept:
        catalog.update(fetch_course_catalog({"term": args.websoc_term, "department": dept}))
    return catalog


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        required = [parse_course_key(c) for c in args.course]
        cfg = ScoreConfig(min_credits=args.min_credits, max_credits=args.max_credits)
        catalog = load_catalog(args)
        results = plan_schedules(catalog, required, cfg=cfg, prune=not args.no_prune, top_k=args.top)
        if args.output:
            write_schedules(args.output, results)
    except (CourseplanError, ValueError, RuntimeError, OSError) as e:
        print(f"courseplan error: {e}", file=sys.stderr)
        return 1

    if args.output:
        logger.info("Wrote %d schedule(s) to %s", len(results), args.output)
    else:
        prompts = {
            "courses": ", ".join(f"{d}-{n}" for d, n in required),
            "credit_hours": f"{cfg.min_credits}-{cfg.max_credits}",
            "prune_dominated": not args.no_prune,
        }
        print_results_table(results, cfg, f"{len(results)} schedule(s)", prompts)
    return 0


if __name__ == "__main__":
    sys.exit(main())
