"""Path helpers for canonical file references.

Canonical references are absolute and lexically normalized. They are built
without touching the filesystem: symlinks are not resolved and files do not
need to exist, so two jobs naming ``./x.bam`` and ``x.bam`` from ``/work``
compare equal before either file is produced.
"""

from __future__ import annotations

import os
from pathlib import Path


def absolute(directory: os.PathLike | str, path: os.PathLike | str) -> Path:
    """Return *path* as an absolute path, rooted at *directory* if relative.

    A relative *directory* is itself rooted at the process working
    directory. Already-absolute paths are only normalized, so the function
    is idempotent.
    """
    return Path(os.path.abspath(os.path.join(directory, path)))


def reset_parent(
    new_root: os.PathLike | str,
    path: os.PathLike | str,
    anchor: os.PathLike | str | None = None,
) -> Path:
    """Move *path* under *new_root*.

    When *path* lies inside *anchor* (usually the job's command directory)
    its location relative to the anchor is kept; a relative *path* is kept
    as is. Otherwise only the file name survives.
    """
    path = Path(path)
    if not path.is_absolute():
        return absolute(new_root, path)
    if anchor is not None:
        anchor = absolute(os.curdir, anchor)
        if path.is_relative_to(anchor):
            return absolute(new_root, path.relative_to(anchor))
    return absolute(new_root, path.name)


def parent_directory(path: os.PathLike | str) -> Path:
    """Return the directory holding *path*."""
    return Path(path).parent
