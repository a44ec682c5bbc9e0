"""
Filesystem primitives used by the transform handlers.
"""

import os
import shutil
import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def ensure_directory(path: PathLike) -> Path:
    """
    Create a directory and any missing ancestors.

    Safe to call repeatedly and from several callers; an existing
    directory is not an error.
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def copy_file(source: PathLike, destination: PathLike) -> Path:
    """Byte-for-byte copy of source to destination, overwriting it."""
    destination = Path(destination)
    shutil.copyfile(source, destination)
    logger.debug(f"Copied file {source} -> {destination}")
    return destination


def copy_tree(source: PathLike, destination: PathLike) -> List[Path]:
    """
    Recursively copy every file under source into destination.

    Relative substructure is preserved and existing files are overwritten.

    Returns:
        Paths of the files written, in a stable order
    """
    source = Path(source)
    destination = Path(destination)
    written = []

    for file_path in sorted(p for p in source.rglob('*') if p.is_file()):
        target = destination / file_path.relative_to(source)
        ensure_directory(target.parent)
        written.append(copy_file(file_path, target))

    return written


def variant_path(destination: PathLike, suffix: str) -> Path:
    """
    Output path of a variant: <dir>/<stem><suffix><ext> of the destination.

    Examples:
        variant_path("assets/icons/app_icon.png", "@2x") -> assets/icons/app_icon@2x.png
        variant_path("assets/icons/app_icon.png", "")    -> assets/icons/app_icon.png
    """
    destination = Path(destination)
    stem, ext = os.path.splitext(destination.name)
    return destination.with_name(f"{stem}{suffix}{ext}")
