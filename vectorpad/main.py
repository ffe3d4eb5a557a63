#!/usr/bin/env python3
"""
VectorPad - Command Line Entry Point

Inspects and exports saved VectorPad projects.
Run with: python -m vectorpad.main
"""

import argparse
import logging
import sys

from PyQt6.QtCore import QSettings

from . import __version__
from .core.config import EditorConfig, load_config
from .io.export import export_html, export_json, export_svg
from .io.project_io import load_project

logger = logging.getLogger(__name__)

EXPORTERS = ("json", "html", "svg")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vectorpad",
        description="Inspect and export VectorPad projects.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--settings", help="INI file with editor settings")

    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser("info", help="list the pages of a project")
    info.add_argument("project", help="project file")

    export = subparsers.add_parser("export", help="export one page of a project")
    export.add_argument("project", help="project file")
    export.add_argument("output", help="output file")
    export.add_argument("-f", "--format", choices=EXPORTERS,
                        help="output format (default: from the output extension)")
    export.add_argument("-p", "--page", type=int,
                        help="page number starting at 1 (default: the active page)")
    return parser


def _load_config(settings_path):
    if not settings_path:
        return EditorConfig()
    return load_config(QSettings(settings_path, QSettings.Format.IniFormat))


def _cmd_info(args) -> int:
    document = load_project(args.project)
    if document is None:
        logger.error("Could not read project %s", args.project)
        return 1
    for index, page in enumerate(document.pages):
        marker = "*" if index == document.active_page_index else " "
        print(f"{marker} {index + 1}. {page.name} ({page.id}): {len(page.elements)} element(s)")
    return 0


def _cmd_export(args, config: EditorConfig) -> int:
    document = load_project(args.project)
    if document is None:
        logger.error("Could not read project %s", args.project)
        return 1

    if args.page is not None:
        index = args.page - 1
        if not 0 <= index < len(document.pages):
            logger.error("Project has no page %d", args.page)
            return 1
        document.load_page(index)

    fmt = args.format or args.output.rsplit(".", 1)[-1].lower()
    if fmt == "json":
        export_json(document, args.output)
    elif fmt in ("html", "htm"):
        export_html(document, args.output, config)
    elif fmt == "svg":
        export_svg(document, args.output, config)
    else:
        logger.error("Unknown export format: %s", fmt)
        return 1
    return 0


def main(argv=None) -> int:
    """Main entry point for the VectorPad command line."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(args.settings)
        if args.command == "info":
            return _cmd_info(args)
        return _cmd_export(args, config)
    except OSError:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
