"""
Minimal HTML element tree.

Builders create ``Element`` nodes bottom-up or through ``add()`` chains; the
tree is serialized once with ``render()``. Plain strings are always escaped,
only ``markupsafe.Markup`` children go out verbatim.
"""

from typing import Dict, List, Optional, Union

from markupsafe import Markup, escape

VOID_TAGS = frozenset({"meta", "link", "img", "hr", "br", "input"})

Child = Union[str, Markup, "Element"]


class Element:
    """One HTML element with ordered attributes and children."""

    __slots__ = ("tag", "attrs", "children")

    def __init__(self, tag: str, attrs: Optional[Dict[str, str]] = None) -> None:
        self.tag = tag
        self.attrs: Dict[str, str] = {}
        self.children: List[Child] = []
        for key, value in (attrs or {}).items():
            self.set(key, value)

    def set(self, key: str, value: str) -> "Element":
        """Set an attribute. Each attribute may be written only once."""
        if key in self.attrs:
            raise ValueError(f"attribute {key!r} already set on <{self.tag}>")
        self.attrs[key] = value
        return self

    def add(self, tag: str, attrs: Optional[Dict[str, str]] = None) -> "Element":
        """Append a new child element and return it."""
        child = Element(tag, attrs)
        self.children.append(child)
        return child

    def append(self, child: "Element") -> "Element":
        self.children.append(child)
        return child

    def text(self, value: str) -> "Element":
        """Append text content; escaped on render. Returns self for chaining."""
        self.children.append(str(value))
        return self

    def raw(self, value: Markup) -> "Element":
        """Append trusted markup that is emitted as-is."""
        if not isinstance(value, Markup):
            raise TypeError("raw() only accepts markupsafe.Markup")
        self.children.append(value)
        return self

    def find_all(self, tag: str) -> List["Element"]:
        """All descendants (and self) with the given tag, in document order."""
        found = [self] if self.tag == tag else []
        for child in self.children:
            if isinstance(child, Element):
                found.extend(child.find_all(tag))
        return found

    def render(self) -> str:
        parts: List[str] = []
        self._render_into(parts)
        return "".join(parts)

    def _render_into(self, parts: List[str]) -> None:
        parts.append("<" + self.tag)
        for key, value in self.attrs.items():
            parts.append(f' {key}="{escape(value)}"')
        parts.append(">")
        if self.tag in VOID_TAGS:
            return
        for child in self.children:
            if isinstance(child, Element):
                child._render_into(parts)
            elif isinstance(child, Markup):
                parts.append(str(child))
            else:
                parts.append(str(escape(child)))
        parts.append(f"</{self.tag}>")

    def __repr__(self) -> str:
        return f"<Element {self.tag} attrs={self.attrs!r} children={len(self.children)}>"


class Document:
    """A complete page: the root <html> element plus the doctype."""

    def __init__(self, root: Element) -> None:
        self.root = root

    @property
    def head(self) -> Element:
        return self.root.find_all("head")[0]

    @property
    def body(self) -> Element:
        return self.root.find_all("body")[0]


def render(doc: Document) -> str:
    """Serialize a document to HTML text."""
    return "<!DOCTYPE html>\n" + doc.root.render() + "\n"
