"""Command line interface for fixedwidth."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml

from .api import (
    EncodeOptions,
    LINE_ENDINGS,
    describe_layout,
    encode_file,
    load_layout,
)
from .errors import FixedWidthError
from .logging import configure_logging, get_logger
from .reporting import (
    set_reporter,
    get_reporter,
    PlainReporter,
    JsonLinesReporter,
    SilentReporter,
    RichReporter,
    set_verbosity,
)


def _encode_cmd(args: argparse.Namespace) -> int:
    opts = EncodeOptions(
        layout_path=args.layout,
        records_path=args.records,
        output_path=args.output,
        line_end=LINE_ENDINGS[args.line_end],
    )
    encode_file(opts)
    return 0


def _layout_cmd(args: argparse.Namespace) -> int:
    layout = load_layout(args.layout)
    info = describe_layout(layout)
    rep = get_reporter()
    if args.json:
        rep.flush()
        print(json.dumps(info, indent=2, sort_keys=True))
        return 0
    rep.section(f"Layout {info['record']}")
    for col in info["fields"]:
        if col["skipped"]:
            get_logger().warning(
                "%s: %s, no usable position (pos=%r)",
                col["name"],
                col["type"],
                col["pos"],
            )
            continue
        pad = " leftpad" if col["leftpad"] else ""
        rep.status(
            f"{col['name']}: {col['type']} "
            f"cols {col['start']}-{col['end']} width={col['width']}{pad}"
        )
    rep.summary(
        "layout",
        record=info["record"],
        fields=len(info["fields"]),
        skipped=len(info["skipped"]),
        line_length=info["line_length"],
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fixedwidth", description="Fixed-width record encoder"
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=["plain", "rich", "json", "silent"],
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    e = sub.add_parser("encode", help="Encode a records file to fixed-width text")
    e.add_argument("layout", type=Path, help="Layout document (JSON/YAML)")
    e.add_argument("records", type=Path, help="Records document (JSON/YAML)")
    e.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (default: stdout)",
    )
    e.add_argument(
        "--line-end",
        choices=sorted(LINE_ENDINGS),
        default="lf",
        help="Line terminator written between records",
    )
    e.set_defaults(func=_encode_cmd)

    lay = sub.add_parser("layout", help="Show the column map of a layout")
    lay.add_argument("layout", type=Path)
    lay.add_argument("--json", action="store_true", help="Emit JSON")
    lay.set_defaults(func=_layout_cmd)

    return p


def _select_reporter(requested: str) -> None:
    if requested == "json":
        set_reporter(JsonLinesReporter())
    elif requested == "silent":
        set_reporter(SilentReporter())
    elif requested == "rich" and sys.stderr.isatty():
        set_reporter(RichReporter())
    else:
        # rich without a TTY falls back quietly to plain
        set_reporter(PlainReporter())


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    _select_reporter(args.reporter)
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    except (
        FixedWidthError,
        FileNotFoundError,
        ValueError,
        yaml.YAMLError,
    ) as e:
        rep = get_reporter()
        rep.flush()
        rep.error(str(e))
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
