"""Command-line interface for Sparklr.

Works on Swizzle YAML documents and sprite frame directories without the
editor UI.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from sparklr.core.assets.sequences import (
    auto_detect_sequences,
    scan_directory,
    validate_sequence,
)
from sparklr.core.config.loader import configure_logging, load_app_config
from sparklr.core.config.models import ViewportConfig
from sparklr.core.document.validation import validate_config
from sparklr.core.document.viewport import fit_to_viewport
from sparklr.core.formats.swizzle.transform import (
    ConfigParseError,
    ImportReport,
    load_document,
    save_document,
    to_text,
)

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def parse_size(value: str) -> tuple[int, int]:
    """Parse a ``WIDTHxHEIGHT`` argument."""
    width, sep, height = value.lower().partition("x")
    if not sep or not width.isdigit() or not height.isdigit():
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got '{value}'")
    return int(width), int(height)


def _load(path: Path) -> ImportReport | None:
    try:
        report = load_document(path)
    except FileNotFoundError:
        err_console.print(f"[red]ERROR: Document not found: {path}[/red]")
        return None
    except ConfigParseError as e:
        err_console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return None

    return report


def _write_output(report: ImportReport, out: str | None, indent: int) -> None:
    if out is None:
        sys.stdout.write(to_text(report.config, indent=indent))
        return
    path = save_document(report.config, out, indent=indent)
    err_console.print(f"[green]✅ Wrote {path}[/green]")


def cmd_validate(args: argparse.Namespace) -> int:
    """Import and validate a document."""
    report = _load(Path(args.file))
    if report is None:
        return 1

    result = validate_config(report.config)
    if result.valid:
        console.print(
            f"[green]✅ Valid: {len(report.config.emitters)} emitter(s)[/green]"
        )
        return 0

    console.print(f"[red]❌ {len(result.errors)} error(s):[/red]")
    for error in result.errors:
        console.print(f"  • {escape(error)}")
    return 1


def cmd_normalize(args: argparse.Namespace, indent: int) -> int:
    """Re-export a document in canonical form."""
    report = _load(Path(args.file))
    if report is None:
        return 1
    _write_output(report, args.out, indent)
    return 0


def cmd_recentre(args: argparse.Namespace, viewport: ViewportConfig, indent: int) -> int:
    """Recentre a document from one canvas size onto another.

    Without ``--to`` the document is fitted to the configured viewport.
    """
    report = _load(Path(args.file))
    if report is None:
        return 1

    new_w, new_h = args.to_size or (viewport.width, viewport.height)
    config = fit_to_viewport(report.config, new_w, new_h, authored=args.from_size)

    _write_output(ImportReport(config=config, rejected=report.rejected), args.out, indent)
    return 0


def cmd_sequences(args: argparse.Namespace) -> int:
    """Detect a numbered frame sequence in a directory."""
    try:
        files = scan_directory(args.directory)
    except NotADirectoryError as e:
        err_console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return 1

    detection = auto_detect_sequences(files)
    if not detection.sequences:
        console.print("[yellow]No frame sequence detected[/yellow]")

    for sequence in detection.sequences:
        console.print(f"[bold]🎞  {sequence.base_name}[/bold]: {sequence.pattern}")
        console.print(
            f"   Frames {sequence.start_frame}-{sequence.end_frame}, "
            f"{len(sequence.files)} file(s), padding {sequence.padding}"
        )
        validation = validate_sequence(sequence)
        for warning in validation.warnings:
            console.print(f"   [yellow]⚠ {warning}[/yellow]")
        if not validation.valid:
            console.print("   [red]Sequence is incomplete[/red]")

    if detection.individual_files:
        console.print(f"\n{len(detection.individual_files)} individual file(s):")
        for file in detection.individual_files:
            console.print(f"  • {file.name}")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="sparklr",
        description="Sparklr - Swizzle particle effect configuration tools",
    )
    p.add_argument(
        "--app-config",
        default=None,
        help="Path to app config (default: sparklr.yaml if present)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    validate = sub.add_parser("validate", help="Validate a Swizzle YAML document")
    validate.add_argument("file", help="Path to YAML document")

    normalize = sub.add_parser("normalize", help="Re-export a document in canonical form")
    normalize.add_argument("file", help="Path to YAML document")
    normalize.add_argument("--out", default=None, help="Output path (default: stdout)")

    recentre = sub.add_parser("recentre", help="Recentre emitters for a new canvas size")
    recentre.add_argument("file", help="Path to YAML document")
    recentre.add_argument(
        "--from", dest="from_size", type=parse_size, default=(800, 600), help="Old size WxH"
    )
    recentre.add_argument(
        "--to",
        dest="to_size",
        type=parse_size,
        default=None,
        help="New size WxH (default: viewport from app config)",
    )
    recentre.add_argument("--out", default=None, help="Output path (default: stdout)")

    sequences = sub.add_parser("sequences", help="Detect a frame sequence in a directory")
    sequences.add_argument("directory", help="Directory of frame images")

    return p


def run(argv: list[str] | None = None) -> int:
    """Parse arguments and run a command; returns the exit code."""
    args = build_arg_parser().parse_args(argv)

    app_config = load_app_config(args.app_config)
    configure_logging(app_config)
    indent = app_config.export.indent

    if args.cmd == "validate":
        return cmd_validate(args)
    if args.cmd == "normalize":
        return cmd_normalize(args, indent)
    if args.cmd == "recentre":
        return cmd_recentre(args, app_config.viewport, indent)
    if args.cmd == "sequences":
        return cmd_sequences(args)
    return 2


def main() -> None:
    """Main entry point for CLI."""
    sys.exit(run())
