"""HTML report renderer.

Builds the whole page as an ``Element`` tree: a navigation list on the left,
a Vue mount point on the right, and one hidden ``<data>`` section per
category. The bundled script copies the chosen section into the mount point,
so switching views never reloads the page.

All cluster data goes in as text and is escaped on serialization; only the
bundled CSS/JS assets are inserted verbatim.
"""

import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from jinja2 import Environment

from .. import PROJECT_URL
from .._util import debug
from ..markup import Document, Element, render as render_document
from ..schema import ReportModel, Resource
from . import load_asset, make_env

BOOTSTRAP_CSS = "https://cdn.jsdelivr.net/npm/bootstrap@5.0.0-beta3/dist/css/bootstrap.min.css"
BOOTSTRAP_CSS_SRI = "sha384-eOJMYsd53ii+scO/bJGFsiCZc+5NDVN2yr8+0RDqr0Ql0h+rP48ckxlpbzKgwra6"
BOOTSTRAP_JS = "https://cdn.jsdelivr.net/npm/bootstrap@5.0.0-beta3/dist/js/bootstrap.bundle.min.js"
BOOTSTRAP_JS_SRI = "sha384-JEW9xMcG8R+pH31jmWH6WWP0WintQrMb4s7ZOdauHnUtxwoG2vI5DkLtS3qm9Ekf"
VUE_JS = "https://cdn.jsdelivr.net/npm/vue@2/dist/vue.js"

STYLE_ASSET = "index_style.css"
SCRIPT_ASSET = "index_script.js"

_NAV_ITEM_CLASS = "list-group-item list-group-item-action"
_DT_CLASS = "text-light bg-secondary ps-1 mb-1"

Category = Tuple[str, Sequence[Resource]]


class ReportWriteError(Exception):
    """The report could not be written to its destination."""


def category_key(title: str) -> str:
    """Key shared by nav entries and data sections; the client script matches on it."""
    return title.lower()


def _error_count(resources: Iterable[Resource]) -> int:
    return sum(1 for r in resources if r.is_error())


def _badge(count: int, extra_class: str = "") -> Element:
    return Element("span", {"class": f"badge bg-danger{extra_class}"}).text(str(count))


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

def _chunk(cells: Sequence[str], width: int) -> List[List[str]]:
    return [list(cells[i:i + width]) for i in range(0, len(cells), width)]


def build_table(header: Sequence[str], cells: Sequence[str], width: int) -> Element:
    """Lay out cells row-major, ``width`` per row; a short last row is kept."""
    if width < 1:
        raise ValueError(f"table width must be >= 1, got {width}")
    table = Element("table", {"class": "table table-sm table-striped font-monospace"})

    if header:
        tr = table.add("thead").add("tr")
        for i, item in enumerate(header):
            tag = "th" if i == 0 else "td"
            tr.add(tag, {"scope": "col"}).text(item)

    tbody = table.add("tbody")
    for row in _chunk(cells, width):
        tr = tbody.add("tr")
        for i, item in enumerate(row):
            if i == 0:
                tr.add("th", {"scope": "row"}).text(item)
            else:
                tr.add("td").text(item)
    return table


# ---------------------------------------------------------------------------
# Navigation list
# ---------------------------------------------------------------------------

def _nav_link(key: str) -> Element:
    return Element("a", {
        "href": "#",
        "v-on:click": f"changeContent('{key}')",
        "class": _NAV_ITEM_CLASS,
    })


def build_nav_index(categories: Sequence[Category]) -> Element:
    """Summary first, then one entry per category, then the project link."""
    navlist = Element("div", {"class": "list-group"})
    navlist.append(_nav_link(category_key("Summary"))).text("Summary")

    for title, resources in categories:
        entry = navlist.append(_nav_link(category_key(title))).text(title)
        errors = _error_count(resources)
        if errors > 0:
            entry.append(_badge(errors, " float-end"))

    navlist.add("a", {
        "href": PROJECT_URL,
        "class": _NAV_ITEM_CLASS + " text-center",
        "target": "_blank",
    }).add("img", {
        "src": "https://github.com/favicon.ico",
        "alt": "GitHub logo",
        "title": "Found a bug or issue? Visit this project's git repo.",
    })
    return navlist


# ---------------------------------------------------------------------------
# Summary section
# ---------------------------------------------------------------------------

def _error_listing(dl: Element, heading: str, names: List[str],
                   problem: str, all_good: str) -> None:
    dl.add("dt", {"class": _DT_CLASS}).text(heading)
    dd = dl.add("dd")
    if names:
        dd.text("The following ")
        dd.append(_badge(len(names)))
        dd.text(f" {problem}")
        dd.append(build_table([], names, 1))
    else:
        dd.text(all_good)


def build_summary_panel(model: ReportModel) -> Element:
    data = Element("data", {"id": f"{category_key('Summary')}-data"})
    data.add("h1").text("Summary")
    data.add("hr")
    dl = data.add("dl")

    dl.add("dt", {"class": _DT_CLASS}).text("Cluster")
    dl.add("dd").append(build_table([], ["OpenShift Version", model.version], 2))

    _error_listing(
        dl,
        f"{len(model.nodes)} Nodes",
        [n.name for n in model.nodes if n.is_error()],
        "Nodes do not have a true Ready condition",
        "All nodes ready",
    )
    _error_listing(
        dl,
        f"{len(model.machines)} Machines",
        [m.name for m in model.machines if m.is_error()],
        "Machines not in Running phase",
        "All Machines in Running phase",
    )

    dl.add("dt", {"class": _DT_CLASS}).text(f"{len(model.machinesets)} MachineSets")
    return data


# ---------------------------------------------------------------------------
# Per-category resource sections
# ---------------------------------------------------------------------------

def _accordion_item(res: Resource, index: int, accordion_id: str) -> Element:
    # names may repeat within a category; the position keeps ids unique
    safename = f"{res.safename()}-{index}"
    item = Element("div", {"class": "accordion-item"})

    button_class = "accordion-button collapsed p-2"
    if res.is_error():
        button_class += " bg-danger text-white"
    item.add("h2", {
        "class": "accordion-header",
        "id": f"heading-{safename}",
    }).add("button", {
        "class": button_class,
        "type": "button",
        "data-bs-toggle": "collapse",
        "data-bs-target": f"#collapse-{safename}",
        "aria-expanded": "false",
        "aria-controls": f"collapse-{safename}",
    }).text(res.name)

    item.add("div", {
        "id": f"collapse-{safename}",
        "class": "accordion-collapse collapse",
        "aria-labelledby": f"heading-{safename}",
        "data-bs-parent": f"#{accordion_id}",
    }).add("div", {"class": "accordion-body fs-6"}).add("pre").text(res.raw())
    return item


def build_resource_panel(title: str, resources: Sequence[Resource]) -> Element:
    """One hidden data section holding an accordion item per resource."""
    key = category_key(title)
    data = Element("data", {"id": f"{key}-data"})
    data.add("h1").text(title)
    accordion_id = f"{key}-accordion"
    accordion = data.add("div", {"class": "accordion", "id": accordion_id})
    for index, res in enumerate(resources):
        if not isinstance(res, Resource):
            raise TypeError(f"{type(res).__name__} does not provide the Resource interface")
        accordion.append(_accordion_item(res, index, accordion_id))
    return data


# ---------------------------------------------------------------------------
# Document assembly
# ---------------------------------------------------------------------------

def _build_head(model: ReportModel, env: Environment) -> Element:
    head = Element("head")
    head.add("title").text(model.title)
    head.add("meta", {"charset": "utf-8"})
    head.add("link", {
        "href": BOOTSTRAP_CSS,
        "rel": "stylesheet",
        "integrity": BOOTSTRAP_CSS_SRI,
        "crossorigin": "anonymous",
    })
    head.add("style").raw(load_asset(env, STYLE_ASSET))
    return head


def _build_body(model: ReportModel, env: Environment) -> Element:
    categories = model.categories()
    body = Element("body", {"class": "bg-secondary"})

    row = body.add("div", {"id": "app", "class": "container-fluid"}).add("div", {"class": "row mt-2"})
    row.add("div", {"class": "col-2", "id": "nav-col"}).append(build_nav_index(categories))
    row.add("div", {"class": "col-10 bg-white rounded"}).add("div", {
        "id": "main-content",
        "class": "overflow-auto",
    }).add("span", {"v-html": "content"})

    # Hidden sections; the script swaps their contents into #main-content.
    body.append(build_summary_panel(model))
    for title, resources in categories:
        body.append(build_resource_panel(title, resources))

    body.add("script", {
        "src": BOOTSTRAP_JS,
        "integrity": BOOTSTRAP_JS_SRI,
        "crossorigin": "anonymous",
    })
    body.add("script", {"src": VUE_JS})
    body.add("script").raw(load_asset(env, SCRIPT_ASSET))
    return body


def assemble(model: ReportModel, env: Optional[Environment] = None) -> Document:
    """Build the complete page tree for a report model."""
    if env is None:
        env = make_env()
    html = Element("html", {"lang": "en"})
    html.append(_build_head(model, env))
    html.append(_build_body(model, env))
    debug("html_report", f"assembled report {model.title!r}: "
          + ", ".join(f"{t}={len(r)}" for t, r in model.categories()))
    return Document(html)


def render_html(model: ReportModel, env: Optional[Environment] = None) -> str:
    return render_document(assemble(model, env))


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def _new_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_report(html: str, output_path: Path) -> None:
    """Write html to output_path atomically; nothing is left behind on failure."""
    output_path = Path(output_path)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_path.name}.", suffix=".tmp", dir=str(output_path.parent),
        )
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            os.fchmod(fh.fileno(), _new_file_mode())
            fh.write(html)
        os.replace(tmp_name, output_path)
        tmp_name = None
    except OSError as e:
        raise ReportWriteError(f"cannot write {output_path}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    debug("html_report", f"wrote {output_path} ({len(html)} bytes)")


def render(
    model: ReportModel,
    env: Environment,
    output_path: Path,
) -> None:
    """Render the report for model and write it to output_path."""
    write_report(render_html(model, env), output_path)
