"""CLI entry point: python -m latestnews [--out PATH] [options]"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from latestnews.items import ArticleRecord
from latestnews.output import write_site
from latestnews.query import fetch_latest
from latestnews.renderers import format_timestamp, render_text
from latestnews.settings import load_settings

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="latestnews",
        description=(
            "Fetch the newest article from a news homepage.\n"
            "Prints a text summary, or writes an HTML page plus latest.json with --out."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--out", default=None, metavar="PATH",
                        help="Write the HTML page to PATH and latest.json beside it")
    parser.add_argument("--profile", default=None, metavar="YAML",
                        help="YAML site profile with selector and timeout overrides")
    parser.add_argument("--base-url", default=None, metavar="URL",
                        help="Homepage URL, also used to resolve relative links")
    parser.add_argument("--engine", choices=["browser", "static"], default=None,
                        help="Page driver: headless Chromium or plain HTTP (default: browser)")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="Fail the run when no article text is extracted")
    parser.add_argument("--headful", action="store_true", default=False,
                        help="Show the browser window (browser engine only)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_summary(record: ArticleRecord, html_path: Path, json_path: Path) -> None:
    console = Console()
    tbl = Table(title="[bold green]Latest article[/bold green]", box=box.SIMPLE_HEAVY,
                show_header=False)
    tbl.add_column("Field", style="bold", no_wrap=True)
    tbl.add_column("Value", overflow="fold")
    tbl.add_row("Title", escape(record.title) or "-")
    tbl.add_row("URL", f"[blue]{escape(record.url)}[/blue]")
    tbl.add_row("Fetched", format_timestamp(record.fetched_at))
    tbl.add_row("Lines", str(len(record.lines)))
    tbl.add_row("HTML", f"[green]{escape(str(html_path))}[/green]")
    tbl.add_row("Record", f"[green]{escape(str(json_path))}[/green]")
    console.print(tbl)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = load_settings(
            args.profile,
            base_url=args.base_url,
            engine=args.engine,
            strict=args.strict,
            headless=False if args.headful else None,
        )
    except (ValueError, OSError, yaml.YAMLError) as exc:
        print(f"ERROR: invalid configuration: {exc}", file=sys.stderr)
        return 2

    record = fetch_latest(settings)
    if record is None:
        print("ERROR: could not fetch the latest article (see log above)", file=sys.stderr)
        return 1

    if args.out:
        try:
            html_path, json_path = write_site(
                record, args.out, site_name=settings.site_name, language=settings.language,
            )
        except OSError:
            logger.exception("Could not write output to %s", args.out)
            return 1
        _print_summary(record, html_path, json_path)
        return 0

    print(render_text(record))
    return 0


if __name__ == "__main__":
    sys.exit(main())
