"""
CLI argument parsing.
"""

import argparse
from pathlib import Path
from typing import Optional

from . import __version__


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="camgi",
        description="Render an OpenShift must-gather snapshot as a single-page HTML report.",
    )
    parser.add_argument(
        "snapshot",
        type=Path,
        metavar="SNAPSHOT",
        help="Snapshot JSON produced from a must-gather archive",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output",
        type=Path,
        default=Path("./camgi-report.html"),
        help="Where to write the report (default: ./camgi-report.html)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Write the report to stdout instead of a file",
    )
    parser.add_argument(
        "--title",
        type=str,
        metavar="TITLE",
        help="Page title (default: the title stored in the snapshot)",
    )
    parser.add_argument(
        "--webbrowser",
        action="store_true",
        help="Open the written report in the default web browser",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)
    if args.stdout and args.webbrowser:
        parser.error("--webbrowser needs a report file; it cannot be combined with --stdout")
    return args
