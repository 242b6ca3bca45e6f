"""Command line entry point for the view helpers."""
import argparse
import logging
import sys
from typing import List, Optional

from .citation import Citation
from .config import Config
from .dates import DateConverter
from .i18n import Translator
from .icons import Icon
from .models import RecordDriver
from .utils.error_handling import cli_error_handler
from .utils.logging_setup import log_operation, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="record_helpers",
        description="Render citations and icons for bibliographic records",
    )
    parser.add_argument("--log-level", default=Config.LOG_LEVEL,
                        help="Logging level (default: %(default)s)")
    parser.add_argument("--log-dir", default=None,
                        help="Also write logs to this directory")
    subparsers = parser.add_subparsers(dest="command", required=True)

    cite = subparsers.add_parser("cite", help="Print citations for a record")
    cite.add_argument("record", help="Path to a JSON file holding the record")
    cite.add_argument("--format", dest="formats", action="append",
                      help="Citation format (APA, Chicago, MLA); repeatable")

    icon = subparsers.add_parser("icon", help="Print the markup for an icon")
    icon.add_argument("name", help="Icon name or alias")
    icon.add_argument("--class", dest="css_class", default=None,
                      help="Extra CSS classes")
    icon.add_argument("--config", default=None,
                      help="Icon configuration YAML (default: $ICON_CONFIG)")
    icon.add_argument("--rtl", action="store_true", default=Config.RTL,
                      help="Prefer right-to-left icon variants")
    return parser


@cli_error_handler
def run_cite(args: argparse.Namespace) -> int:
    driver = RecordDriver.from_json_file(args.record)
    citation = Citation(DateConverter(), Translator.from_file())(driver)
    citations = citation.get_citations(args.formats)
    log_operation("Citations rendered", f"{args.record} ({', '.join(citations)})")
    for fmt, html in citations.items():
        print(f"{fmt}: {html}")
    return 0


@cli_error_handler
def run_icon(args: argparse.Namespace) -> int:
    icon = Icon(Config.get_icon_config(args.config), rtl=args.rtl)
    print(icon(args.name, args.css_class))
    for stylesheet in icon.stylesheets:
        logging.info(f"Stylesheet required: {stylesheet}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main program entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(log_dir=args.log_dir, level=args.log_level)

    if args.command == "cite":
        return run_cite(args)
    return run_icon(args)


if __name__ == "__main__":
    sys.exit(main())
