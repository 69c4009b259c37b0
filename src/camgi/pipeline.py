"""
Pipeline: load a snapshot produced by the must-gather extractor, then run renderers.
"""

import json
import sys
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from ._util import debug
from .schema import ReportModel, SCHEMA_VERSION


class SnapshotError(Exception):
    """The snapshot file is missing, unreadable or does not match the schema."""


def load_snapshot(path: Path) -> ReportModel:
    """Load and validate a report snapshot from JSON."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(f"cannot read snapshot {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotError(f"{path}: expected a JSON object at top level")

    file_version = data.get("schema_version", 1)
    if isinstance(file_version, int) and file_version > SCHEMA_VERSION:
        print(
            f"WARNING: snapshot was created by a newer camgi (schema v{file_version}, "
            f"this tool supports v{SCHEMA_VERSION}). Some fields may be dropped.",
            file=sys.stderr,
        )
        data = {**data, "schema_version": SCHEMA_VERSION}
    try:
        model = ReportModel.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"{path} does not match the snapshot schema:\n{e}") from e
    debug("pipeline", f"loaded {path}: {len(model.nodes)} nodes, "
          f"{len(model.machines)} machines, {len(model.machinesets)} machinesets")
    return model


def save_snapshot(model: ReportModel, path: Path) -> None:
    """Serialize a report model to JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(model.model_dump_json(indent=2), encoding="utf-8")


def run_pipeline(
    *,
    snapshot_path: Path,
    output_path: Optional[Path],
    run_renderers: Callable[[ReportModel, Path], None],
    title: Optional[str] = None,
) -> ReportModel:
    """
    Load the snapshot, apply overrides, and render to output_path.

    With output_path None the renderers are skipped; the caller decides what
    to do with the returned model.
    """
    model = load_snapshot(snapshot_path)
    if title is not None:
        model = model.model_copy(update={"title": title})
    if output_path is not None:
        run_renderers(model, output_path)
    return model
