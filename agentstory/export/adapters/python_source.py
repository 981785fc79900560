"""Helpers for adapters that emit Python source files.

Story text ends up inside generated modules as function names, docstrings
and string constants. These helpers turn arbitrary text into identifiers
and literals that always compile.
"""

from __future__ import annotations

import keyword

from agentstory.schemas.base import generate_slug


def python_identifier(text: str) -> str:
    """Slug with underscores, usable as a Python function or parameter name.

    Reserved words get a trailing underscore (``class`` -> ``class_``).

    Example:
        >>> python_identifier("3D Render")
        '_3d_render'
    """
    name = generate_slug(text).replace("-", "_")
    if not name or name[0].isdigit():
        name = f"_{name}"
    if keyword.iskeyword(name):
        name = f"{name}_"
    return name


def unique_identifier(text: str, taken: set[str]) -> str:
    """Return ``python_identifier(text)`` suffixed ``_2``, ``_3``... until unused.

    The chosen name is added to ``taken``.
    """
    base = python_identifier(text)
    name = base
    suffix = 2
    while name in taken:
        name = f"{base}_{suffix}"
        suffix += 1
    taken.add(name)
    return name


def docstring_literal(text: str) -> str:
    """Quote ``text`` as a triple-quoted string literal that always compiles.

    Backslashes and double quotes are escaped, as is NUL, so Windows paths
    and text ending in a quote survive unchanged.
    """
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\x00", "\\x00")
    return f'"""{escaped}"""'


__all__ = ["python_identifier", "unique_identifier", "docstring_literal"]
