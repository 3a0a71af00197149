import argparse
import logging
import sys

from firstfollow.grammar import GrammarError
from firstfollow.grammars import GRAMMARS
from firstfollow.report import render, to_frame, visualize
from firstfollow.sets import analyze


log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="firstfollow",
        description="Computes FIRST and FOLLOW sets of a built-in grammar",
    )
    parser.add_argument(
        "grammar", nargs="?", default="sequence", choices=sorted(GRAMMARS),
        help="Name of the grammar to analyze (default: %(default)s)",
    )
    parser.add_argument(
        "--first-only", action="store_true", dest="first_only",
        help="Compute FIRST sets only",
    )
    parser.add_argument(
        "--start", metavar="SYMBOL",
        help="Start symbol seeding FOLLOW with $ (default: the grammar goal)",
    )
    parser.add_argument(
        "--table", action="store_true",
        help="Print the sets as a table",
    )
    parser.add_argument(
        "--graph", action="store_true",
        help="Draw the non-terminal dependency graph",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log every fixed-point pass",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.first_only and args.start is not None:
        parser.error("--start seeds FOLLOW sets and cannot be used with --first-only")

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    grammar = GRAMMARS[args.grammar]
    log.debug("Analyzing grammar %r:\n%s", args.grammar, grammar)

    try:
        analysis = analyze(grammar, follow=not args.first_only, start=args.start)
    except GrammarError as e:
        log.error("%s", e)
        return 1

    if args.table:
        print(to_frame(analysis))
    else:
        print(render(analysis))

    if args.graph:
        visualize(grammar)
    return 0
