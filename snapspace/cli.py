"""
snapspace command line

Usage:
    snapspace eval "1/3 + 10px" 1920
    snapspace check "100% - 20px" "1/2"
    snapspace suggest --wm-class firefox --title "Mozilla Firefox"
    snapspace compact
"""

from __future__ import annotations
import argparse
import os
import sys
from typing import List, Optional

from pubsub import pub

from .config import SnapConfig
from .history import LayoutHistoryStore
from .layout_expression import LayoutExpressionError, parse, resolve
from .telemetry import configure_logging, debug_event_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snapspace", description="Layout expressions and layout history"
    )
    parser.add_argument(
        "--log-level", default=os.environ.get("SNAPSPACE_LOG_LEVEL", "WARNING")
    )
    parser.add_argument(
        "--history",
        default=None,
        help="History log file (default: $XDG_DATA_HOME/snapspace/layout-history.jsonl)",
    )

    sub = parser.add_subparsers(dest="command")
    sub.required = True

    p_eval = sub.add_parser("eval", help="Evaluate an expression against a size")
    p_eval.add_argument("expression")
    p_eval.add_argument("size", type=float, help="Container size in pixels")

    p_check = sub.add_parser("check", help="Validate expressions")
    p_check.add_argument("expressions", nargs="+")

    p_suggest = sub.add_parser("suggest", help="Show the remembered layout for a window")
    p_suggest.add_argument("--wm-class", required=True)
    p_suggest.add_argument("--title", default="")
    p_suggest.add_argument(
        "--all", action="store_true", help="List every ranked layout for the class"
    )

    sub.add_parser(
        "compact",
        help="Compact the history log (not while a session is using it)",
        description=(
            "Rewrite the history log keeping only the events that still "
            "affect lookups. The log must have a single writer: stop the "
            "session that records into it first, or point --history at a copy."
        ),
    )

    return parser


def _load_config(args: argparse.Namespace) -> SnapConfig:
    if args.history:
        return SnapConfig(history_path=args.history, log_level=args.log_level)
    return SnapConfig(log_level=args.log_level)


def _cmd_eval(args: argparse.Namespace) -> int:
    try:
        print(resolve(args.expression, args.size))
    except LayoutExpressionError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    failed = 0
    for expression in args.expressions:
        try:
            parse(expression)
        except LayoutExpressionError as e:
            print(f"{expression!r}: {e.category.value}")
            failed += 1
        else:
            print(f"{expression!r}: ok")
    return 1 if failed else 0


def _cmd_suggest(args: argparse.Namespace, store: LayoutHistoryStore) -> int:
    store.load()
    if args.all:
        layout_ids = store.recent_layout_ids(args.wm_class)
        for layout_id in layout_ids:
            print(layout_id)
        return 0 if layout_ids else 1

    # No live window in this process, so no session selection can match
    layout_id = store.get_selected_layout_id(-1, args.wm_class, args.title)
    if layout_id is None:
        return 1
    print(layout_id)
    return 0


def _cmd_compact(store: LayoutHistoryStore) -> int:
    if not store.path.exists():
        print(f"No history at {store.path}")
        return 0

    store.load()
    before = len(store.events)
    if not store.compact():
        print("Compaction failed", file=sys.stderr)
        return 1
    print(f"Compacted {store.path}: {before} -> {len(store.events)} events")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = _build_parser().parse_args(argv)
    config = _load_config(args)

    configure_logging(config.log_level)
    if config.debug:
        pub.subscribe(debug_event_logger, pub.ALL_TOPICS)

    if args.command == "eval":
        return _cmd_eval(args)
    if args.command == "check":
        return _cmd_check(args)

    store = LayoutHistoryStore.from_config(config, bus=pub)
    if args.command == "suggest":
        return _cmd_suggest(args, store)
    return _cmd_compact(store)


if __name__ == "__main__":
    sys.exit(main())
