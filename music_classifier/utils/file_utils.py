"""Path helpers and non-destructive file operations for Music Classifier.

None of the operations here ever overwrite an existing file: links and
copies are skipped when the destination exists, and renames refuse to
clobber a different file.
"""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path
from typing import Iterable

from music_classifier.utils.constants import PARTIAL_COPY_SUFFIX
from music_classifier.utils.logger import get_logger

logger = get_logger("utils.file_utils")

# Characters that would split a single name into several path components.
_PATH_BREAKING_CHARS = frozenset({"/", "\\", "\0", os.sep})


def is_audio_file(path: Path, extensions: Iterable[str]) -> bool:
    """Check if a file has one of the given audio extensions.

    Args:
        path: Path to check.
        extensions: Allowed suffixes including the dot (e.g. ``".mp3"``).

    Returns:
        True if the suffix matches, ignoring case.
    """
    suffix = path.suffix.lower()
    return any(suffix == ext.lower() for ext in extensions)


def sanitize_path_component(name: str) -> str:
    """Make a name usable as exactly one path component.

    Only separators and NUL are replaced; everything else is kept so that
    names stay recognizable and re-parse to the same value on the next run.

    Args:
        name: Artist, genre or file name.

    Returns:
        The name with path-breaking characters replaced by ``_``.
    """
    sanitized = "".join("_" if ch in _PATH_BREAKING_CHARS else ch for ch in name).strip()
    if sanitized in ("", ".", ".."):
        return "_"
    return sanitized


def ensure_directory(directory: Path) -> Path:
    """Create a directory and its parents if missing.

    Raises:
        OSError: If the directory cannot be created.
    """
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def rename_file(src: Path, dst: Path) -> Path:
    """Rename a file in place without clobbering another file.

    A rename onto itself is a no-op, which keeps re-runs over already
    canonical names idempotent. A case-only rename of the same file is
    allowed on case-insensitive file systems.

    Args:
        src: Existing file.
        dst: New path.

    Returns:
        The destination path.

    Raises:
        FileNotFoundError: If source does not exist.
        FileExistsError: If a different file already occupies ``dst``.
        OSError: If the rename itself fails.
    """
    if src == dst:
        return dst
    if not src.exists():
        raise FileNotFoundError(errno.ENOENT, "Source file not found", str(src))
    if dst.exists() and not _is_same_entry(src, dst):
        raise FileExistsError(errno.EEXIST, "Destination already exists", str(dst))

    src.rename(dst)
    logger.debug("Renamed: %s -> %s", src, dst)
    return dst


def link_file(src: Path, dst: Path) -> bool:
    """Create a hard link at ``dst`` pointing to ``src``.

    Args:
        src: Existing file.
        dst: Link path.

    Returns:
        True if a link was created, False if ``dst`` already existed.

    Raises:
        FileNotFoundError: If source does not exist.
        OSError: If the link cannot be created.
    """
    if dst.exists() or dst.is_symlink():
        logger.debug("Link exists, skipping: %s", dst)
        return False
    if not src.exists():
        raise FileNotFoundError(errno.ENOENT, "Source file not found", str(src))

    dst.hardlink_to(src)
    logger.debug("Linked: %s -> %s", src, dst)
    return True


def copy_file(src: Path, dst: Path) -> bool:
    """Copy a file byte for byte unless the destination already exists.

    The data is written to a ``.partial`` sibling first and only moved to
    ``dst`` once its size matches the source, so an interrupted or short
    copy never shows up under the final name.

    Args:
        src: Existing file.
        dst: Copy path.

    Returns:
        True if a copy was made, False if ``dst`` already existed.

    Raises:
        FileNotFoundError: If source does not exist.
        OSError: If the copy fails or the integrity check fails.
    """
    if dst.exists() or dst.is_symlink():
        logger.debug("Copy exists, skipping: %s", dst)
        return False
    if not src.exists():
        raise FileNotFoundError(errno.ENOENT, "Source file not found", str(src))

    partial = dst.with_name(dst.name + PARTIAL_COPY_SUFFIX)
    try:
        shutil.copy2(src, partial)
        src_size = src.stat().st_size
        partial_size = partial.stat().st_size
        if partial_size != src_size:
            raise OSError(
                f"Copy failed: size mismatch (src={src_size}, dst={partial_size}): {dst}"
            )
        os.replace(partial, dst)
    except OSError:
        partial.unlink(missing_ok=True)
        raise

    logger.debug("Copied: %s -> %s", src, dst)
    return True


def _is_same_entry(src: Path, dst: Path) -> bool:
    """True when ``dst`` is ``src`` under a different letter case."""
    try:
        return src.samefile(dst) and str(src).casefold() == str(dst).casefold()
    except OSError:
        return False
