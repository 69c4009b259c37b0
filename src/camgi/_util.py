"""Shared utilities for camgi: debug logging, identifier sanitizing."""

import os
import re
import sys

_DEBUG = bool(os.environ.get("CAMGI_DEBUG", ""))

_UNSAFE_CHAR = re.compile(r"[^A-Za-z0-9-]")


def debug(label: str, msg: str) -> None:
    """Print a debug message to stderr when CAMGI_DEBUG is set."""
    if _DEBUG:
        print(f"[camgi] {label}: {msg}", file=sys.stderr)


def safe_identifier(name: str) -> str:
    """Turn an arbitrary name into a token usable in HTML ids and CSS selectors.

    Letters, digits and '-' pass through; anything else is replaced by
    ``_<hex codepoint>_`` so two different names never collide.
    """
    return _UNSAFE_CHAR.sub(lambda m: f"_{ord(m.group()):x}_", name)
