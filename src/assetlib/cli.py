"""Command line interface for assetlib."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .api import BuildOptions, build_asset, inspect_asset, verify_asset
from .errors import AssetError
from .logging import configure_logging, step
from .reporting import (
    JsonLinesReporter,
    PlainReporter,
    RichReporter,
    SilentReporter,
    get_reporter,
    section,
    set_reporter,
    set_verbosity,
)

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_ERROR = 2


def _build_cmd(args: argparse.Namespace) -> int:
    opts = BuildOptions(
        input_spec=args.spec,
        output_path=args.output,
        ratio_threshold=args.ratio_threshold,
        force=args.force,
    )
    step(f"building {args.output.name} from {args.spec.name}")
    build_asset(opts)
    return EXIT_OK


def _inspect_cmd(args: argparse.Namespace) -> int:
    info = inspect_asset(args.file)
    if args.json:
        print(json.dumps(info, indent=2, sort_keys=True))
        return EXIT_OK
    with section(info["file"]) as rep:
        rep.status(
            "Inspect summary: "
            + f"type={info['type_tag']} version={info['version_string']} "
            + f"metadata={info['metadata_length']} payload={info['payload_length']}"
        )
        for key, value in sorted(info.get("info", {}).items()):
            rep.status(f"{key}: {value}")
        if "info_error" in info:
            rep.warning(info["info_error"]["message"])
    return EXIT_OK


def _verify_cmd(args: argparse.Namespace) -> int:
    rep = get_reporter()
    files: list[Path] = args.files
    step(f"verifying {len(files)} file(s)")
    failed = 0
    rep.start_task("verify", "Verify assets", total=len(files))
    for path in files:
        issues = verify_asset(path)
        for issue in issues:
            rep.error(f"{path.name}: {issue}")
        failed += bool(issues)
        rep.advance("verify", current_item=path.name)
    rep.end_task("verify", files=len(files), issues=failed)
    rep.status(f"Verify summary: files={len(files)} failed={failed}")
    return EXIT_ISSUES if failed else EXIT_OK


def _ratio(text: str) -> float:
    try:
        value = float(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from e
    if not 0.0 < value <= 1.0:
        raise argparse.ArgumentTypeError("must be in (0, 1]")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="assetlib", description="Pack and inspect binary asset files"
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

    b = sub.add_parser("build", help="Build an asset file from a spec file")
    b.add_argument("spec", type=Path)
    b.add_argument("output", type=Path)
    b.add_argument(
        "--ratio-threshold",
        dest="ratio_threshold",
        type=_ratio,
        help="Keep LZ4 output only when compressed/original is at most this",
    )
    b.add_argument(
        "--force", action="store_true", help="Overwrite an existing output file"
    )
    b.set_defaults(func=_build_cmd)

    i = sub.add_parser("inspect", help="Show header and metadata of an asset file")
    i.add_argument("file", type=Path)
    i.add_argument("--json", action="store_true", help="Emit JSON")
    i.set_defaults(func=_inspect_cmd)

    v = sub.add_parser("verify", help="Decode asset files and report problems")
    v.add_argument("files", type=Path, nargs="+")
    v.set_defaults(func=_verify_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    requested = args.reporter
    if requested == "json":
        set_reporter(JsonLinesReporter())
    elif requested == "silent":
        set_reporter(SilentReporter())
    elif requested == "rich" and sys.stderr.isatty():
        set_reporter(RichReporter())
    else:
        set_reporter(PlainReporter())
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    rep = get_reporter()
    try:
        return args.func(args)
    except AssetError as e:
        rep.error(str(e))
        return EXIT_ERROR
    except (FileNotFoundError, FileExistsError) as e:
        rep.error(f"{type(e).__name__}: {e}")
        return EXIT_ERROR
    finally:
        rep.flush()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
