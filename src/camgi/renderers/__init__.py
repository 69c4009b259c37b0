"""
Renderers consume the report model and a Jinja2 environment, writing to an output path.
"""

from pathlib import Path
from typing import Dict, Tuple

from jinja2 import BaseLoader, Environment, FileSystemLoader
from markupsafe import Markup

from ..schema import ReportModel

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_DEFAULT_LOADER = FileSystemLoader(str(TEMPLATES_DIR))

# Embedded assets are read once per loader and shared by every render in the process.
_ASSET_CACHE: Dict[Tuple[BaseLoader, str], Markup] = {}


def make_env() -> Environment:
    """Jinja2 environment whose loader can see the package templates dir."""
    return Environment(
        loader=_DEFAULT_LOADER,
        autoescape=True,
    )


def load_asset(env: Environment, name: str) -> Markup:
    """Return a bundled asset verbatim as trusted markup.

    The source is taken straight from the loader and never rendered as a
    template, so braces in CSS or JavaScript are left alone.
    """
    loader = env.loader or _DEFAULT_LOADER
    key = (loader, name)
    if key not in _ASSET_CACHE:
        source, _filename, _uptodate = loader.get_source(env, name)
        _ASSET_CACHE[key] = Markup(source)
    return _ASSET_CACHE[key]


def run_all(model: ReportModel, output_path: Path) -> None:
    """Run all renderers. The parent directory of output_path is created if missing."""
    from .html_report import render as render_html_report

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    render_html_report(model, make_env(), output_path)
