"""Command-line entry point: walk or search a series described in YAML."""

from __future__ import annotations

import argparse
import logging
import sys

from tscore.config import SeriesConfig

log = logging.getLogger(__name__)

_COMMANDS = {
    "walk": "Iterate a configured series and summarise it",
    "find": "Run a positional search on a configured series",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def _usage() -> None:
    log.error("Usage: python -m tscore <command> [args...]")
    log.error("Available commands:")
    for name, help_text in _COMMANDS.items():
        log.error("  %-6s - %s", name, help_text)


def _walk(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="tscore walk", description=_COMMANDS["walk"])
    p.add_argument("--config", required=True, help="Path to YAML series config")
    p.add_argument("--start", default=None, help="Sub-period start (default: series start)")
    p.add_argument("--end", default=None, help="Sub-period end (default: series end)")
    p.add_argument("--reverse", action="store_true", help="Traverse from end to start")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = p.parse_args(argv)
    _configure_logging(args.verbose)

    series = SeriesConfig.from_yaml(args.config).build()
    count = 0
    bounds = series.data_period(args.start, args.end)
    if bounds is None:
        log.warning("Nothing to visit in %s..%s", args.start or series.date1,
                    args.end or series.date2)
    else:
        it = series.iterator(*bounds)
        step = it.previous if args.reverse else it.next
        while (sample := step()) is not None:
            shown = "missing" if series.is_missing(sample.value) else f"{sample.value:g}"
            log.info("  %s  %s %s", sample.date, shown, sample.flag)
            count += 1
    log.info("Visited %d samples", count)

    limits = series.refresh()
    for key, value in limits.to_dict().items():
        log.info("%-18s: %s", key, value)
    return 0


def _find(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="tscore find", description=_COMMANDS["find"])
    p.add_argument("--config", required=True, help="Path to YAML series config")
    p.add_argument("--date", required=True, help="Target date")
    p.add_argument(
        "--mode", choices=("exact", "next", "previous"), default="exact",
        help="Match mode (default: %(default)s)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = p.parse_args(argv)
    _configure_logging(args.verbose)

    series = SeriesConfig.from_yaml(args.config).build()
    it = series.iterator()
    search = {
        "exact": it.go_to,
        "next": it.go_to_nearest_next,
        "previous": it.go_to_nearest_previous,
    }[args.mode]

    sample = search(args.date, True)
    if sample is None:
        log.warning("No %s match for %s", args.mode, args.date)
        return 1
    log.info("Found %s -> %s %s", sample.date, sample.value, sample.flag)
    return 0


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        logging.basicConfig(level=logging.INFO)
        _usage()
        sys.exit(1)

    command, rest = argv[0], argv[1:]
    if command == "walk":
        sys.exit(_walk(rest))
    elif command == "find":
        sys.exit(_find(rest))
    else:
        logging.basicConfig(level=logging.INFO)
        log.error("Unknown command: %s", command)
        _usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
