"""CLI for trying tab matching and URL resolution offline."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Literal

from browser_controller.fuzzy_match import classify_match
from browser_controller.intents import NoMatchError
from browser_controller.navigation import resolve_navigation
from browser_controller.tab_selector import TabCandidate, rank_tabs, select_tab
from browser_controller.web_constants import DEFAULT_SEARCH_ENGINE_URL, MIN_TAB_SCORE
from utils.file_utils import load_json_list

OutputFormat = Literal["text", "json"]

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve spoken tab and navigation requests."
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    url = sub.add_parser("url", help="Resolve a destination phrase to a URL.")
    url.add_argument("input", help='Destination, e.g. "github" or "example.org".')
    url.add_argument(
        "--search-engine",
        default=DEFAULT_SEARCH_ENGINE_URL,
        help="Search URL template with a {query} placeholder.",
    )

    tab = sub.add_parser("tab", help="Pick the best tab from a JSON tab list.")
    tab.add_argument("query", help='Spoken query, e.g. "git hub".')
    tab.add_argument(
        "--tabs",
        required=True,
        help="Path to a JSON list of {id, title, url, windowId} objects.",
    )
    tab.add_argument(
        "--threshold",
        type=float,
        default=MIN_TAB_SCORE,
        help="Minimum score for a match.",
    )
    tab.add_argument("--all", action="store_true", help="Print the full ranking.")

    score = sub.add_parser("score", help="Score a query against one string.")
    score.add_argument("query")
    score.add_argument("text")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")


def _emit(fmt: OutputFormat, payload: dict, text: str) -> None:
    if fmt == "json":
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(text)


def _run_url(args: argparse.Namespace) -> int:
    result = resolve_navigation(args.input, args.search_engine)
    _emit(args.format, result.to_dict(), f"{result.url}  ({result.rule})")
    return 0


def _run_tab(args: argparse.Namespace) -> int:
    tabs = [TabCandidate.from_dict(item) for item in load_json_list(args.tabs)]
    logger.debug("Loaded %d tabs from %s", len(tabs), args.tabs)
    if args.all:
        ranked = rank_tabs(args.query, tabs)
        lines = [
            f"{item.score:6.1f}  [{item.candidate.id}] {item.candidate.title}"
            for item in ranked
        ]
        _emit(args.format, {"ranking": [item.to_dict() for item in ranked]}, "\n".join(lines))
        return 0
    try:
        best = select_tab(args.query, tabs, threshold=args.threshold)
    except NoMatchError as exc:
        print(f"No match: {exc}", file=sys.stderr)
        return 2
    _emit(
        args.format,
        best.to_dict(),
        f"[{best.candidate.id}] {best.candidate.title} ({best.score:.1f})",
    )
    return 0


def _run_score(args: argparse.Namespace) -> int:
    match = classify_match(args.query, args.text)
    payload = {"score": round(match.score, 2), "kind": match.kind.value}
    _emit(args.format, payload, f"{match.score:.1f}  {match.kind.value}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    handlers = {"url": _run_url, "tab": _run_tab, "score": _run_score}
    try:
        return handlers[args.command](args)
    except (OSError, ValueError, KeyError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
