"""
CLI entry point. Parses args and delegates to pipeline.
"""

import sys
import webbrowser
from pathlib import Path
from typing import Optional

from .cli import parse_args
from .pipeline import SnapshotError, run_pipeline
from .renderers.html_report import ReportWriteError, render_html
from .schema import ReportModel


def _run_renderers(model: ReportModel, output_path: Path) -> None:
    """Run all renderers."""
    from .renderers import run_all

    run_all(model, output_path)


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)

    try:
        model = run_pipeline(
            snapshot_path=args.snapshot,
            output_path=None if args.stdout else args.output,
            run_renderers=_run_renderers,
            title=args.title,
        )
        if args.stdout:
            # Build the full page before writing anything.
            html = render_html(model)
            sys.stdout.write(html)
            sys.stdout.flush()
            return 0
        if args.webbrowser:
            webbrowser.open(args.output.resolve().as_uri())
        return 0
    except (SnapshotError, ReportWriteError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: cannot write report: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
