"""Core functionality package."""

from .diff_engine import compute_unified_diff
from .file_io import (
    commit,
    compute_hash,
    files_identical,
    read_bytes,
    safe_rename,
    scratch_file,
    write_scratch,
)
from .patterns import compile_pattern, split_lines, strip_eol
from .transform import apply_transformation

__all__ = [
    "apply_transformation",
    "commit",
    "compile_pattern",
    "compute_hash",
    "compute_unified_diff",
    "files_identical",
    "read_bytes",
    "safe_rename",
    "scratch_file",
    "split_lines",
    "strip_eol",
    "write_scratch",
]
