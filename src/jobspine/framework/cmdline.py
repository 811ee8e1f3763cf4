"""Command-line fragment helpers for job authors.

Pure functions over ``has_value``: unset parameters render as an empty
string instead of ``None`` or ``[]``.

Examples:
    >>> optional(" -L ", "chr1")
    ' -L chr1'
    >>> optional(" -L ", None)
    ''
    >>> repeat(" -I ", ["a.bam", "b.bam"])
    ' -I a.bam -I b.bam'
    >>> optional(" --maxmem ", 4, fmt="{}g")
    ' --maxmem 4g'
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from jobspine.framework.params import has_value


def optional(prefix: str, param: Any, suffix: str = "", fmt: str = "{}") -> str:
    """Render ``prefix + fmt.format(param) + suffix`` if param has a value."""
    if not has_value(param):
        return ""
    return prefix + fmt.format(param) + suffix


def repeat(
    prefix: str,
    params: Iterable[Any] | None,
    suffix: str = "",
    separator: str = "",
    fmt: str = "{}",
) -> str:
    """Render every param that has a value, joined by *separator*."""
    if params is None:
        return ""
    return separator.join(
        prefix + fmt.format(param) + suffix for param in params if has_value(param)
    )
