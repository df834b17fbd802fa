"""Scratch files, atomic commits and SHA-256 content hashing.

This module provides the file operations every editing primitive is built on:
- scratch_file: Unique scratch path next to a target, removed unless committed
- commit: Replace a target with a staged scratch file via os.replace
- files_identical: Byte-for-byte comparison
- safe_rename: Rename with cross-filesystem fallback (scratch copy + replace + delete)
- compute_hash: SHA-256 content hashing in 'sha256:<hex>' format

Raw bytes are compared and hashed; no line ending normalization is applied.
"""

import filecmp
import hashlib
import os
import shutil
import sys
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager

from scriptlib.errors import CommitError, ErrorCode, TransformError


def compute_hash(data: bytes) -> str:
    """Compute SHA-256 hash of bytes data.

    Args:
        data: Raw bytes to hash (no encoding/normalization applied)

    Returns:
        Hash string in format 'sha256:<64-char-hex-digest>'
    """
    return f"sha256:{hashlib.sha256(data).hexdigest()}"


def read_bytes(path: str) -> bytes:
    """Read a whole file, reporting failures as TransformError."""
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise TransformError(
            f"Failed to read {path}: {e}",
            error_code=ErrorCode.READ_ERROR,
            path=path,
        ) from e


def files_identical(first: str, second: str) -> bool:
    """Return True if both files hold exactly the same bytes."""
    return filecmp.cmp(first, second, shallow=False)


def _fsync_parent_directory(file_path: str) -> None:
    """Fsync parent directory for durability on Linux/macOS.

    On Windows, this is a no-op. Filesystems that don't support directory
    fsync are ignored.
    """
    if sys.platform == 'win32':
        return

    parent_dir = os.path.dirname(file_path)
    if not parent_dir:
        return

    try:
        dir_fd = os.open(parent_dir, os.O_RDONLY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)
    except OSError:
        # Some filesystems don't support directory fsync
        pass


@contextmanager
def scratch_file(target_path: str, prefix: str = '.tmp_') -> Iterator[str]:
    """Provide a unique scratch path in the same directory as target_path.

    The file is created empty by mkstemp, so the name cannot collide with an
    existing file. Whatever happens inside the block, the scratch file is
    removed on exit unless it was moved away by commit().

    Args:
        target_path: File the scratch copy will eventually replace
        prefix: File name prefix for the scratch file

    Yields:
        Path of the scratch file
    """
    target_dir = os.path.dirname(os.path.abspath(target_path))
    try:
        fd, tmp_path = tempfile.mkstemp(dir=target_dir, prefix=prefix)
    except OSError as e:
        raise TransformError(
            f"Failed to create scratch file next to {target_path}: {e}",
            error_code=ErrorCode.WRITE_ERROR,
            path=target_path,
        ) from e
    os.close(fd)

    try:
        yield tmp_path
    finally:
        if os.path.lexists(tmp_path):
            try:
                os.unlink(tmp_path)
            except OSError:
                pass


def write_scratch(tmp_path: str, content: bytes) -> None:
    """Write and fsync the candidate content into a scratch file."""
    try:
        with open(tmp_path, 'wb') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
    except OSError as e:
        raise TransformError(
            f"Failed to stage candidate in {tmp_path}: {e}",
            error_code=ErrorCode.WRITE_ERROR,
            path=tmp_path,
        ) from e


def commit(tmp_path: str, target_path: str, preserve_mode: bool = True) -> None:
    """Atomically replace target_path with the staged scratch file.

    Args:
        tmp_path: Scratch file holding the candidate content
        target_path: File to replace
        preserve_mode: Copy the target's permission bits onto the scratch
            file first (mkstemp creates files with mode 0600)

    Raises:
        CommitError: If the replacement fails; the target is left untouched
    """
    try:
        if preserve_mode:
            shutil.copymode(target_path, tmp_path)
        os.replace(tmp_path, target_path)
    except OSError as e:
        raise CommitError(
            f"Failed to replace {target_path} with {tmp_path}: {e}",
            path=target_path,
        ) from e

    _fsync_parent_directory(target_path)


def safe_rename(src: str, dst: str, prefix: str = '.tmp_') -> bool:
    """Rename file safely with cross-filesystem fallback.

    Args:
        src: Source file path
        dst: Destination file path
        prefix: Scratch file prefix used by the cross-filesystem fallback

    Returns:
        True if cross-filesystem fallback was used, False if normal rename

    Raises:
        OSError: If rename/copy fails; dst is left untouched and src kept
        TransformError: If no scratch file can be created next to dst

    Implementation:
        If source and destination are on the same filesystem, uses atomic
        os.replace. If on different filesystems, copies src into a scratch
        file next to dst, fsyncs it, replaces dst with it and only then
        deletes src.
    """
    src_stat = os.stat(src)
    dst_dir = os.path.dirname(os.path.abspath(dst))
    dst_dir_stat = os.stat(dst_dir)

    if src_stat.st_dev == dst_dir_stat.st_dev:
        os.replace(src, dst)
        _fsync_parent_directory(dst)
        return False

    with scratch_file(dst, prefix=prefix) as tmp_path:
        shutil.copy2(src, tmp_path)

        with open(tmp_path, 'r+b') as f:
            os.fsync(f.fileno())

        os.replace(tmp_path, dst)

    _fsync_parent_directory(dst)

    os.unlink(src)

    return True
