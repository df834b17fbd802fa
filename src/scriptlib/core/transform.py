"""Idempotent, atomic file transformation.

apply_transformation() is the protocol behind every editing primitive:

1. Read and decode the target
2. Produce the candidate text with the primitive's transform
3. Stage the encoded candidate in a scratch file next to the target
4. Compare scratch and target byte-for-byte
5. Identical: drop the scratch file, report Outcome.UNCHANGED
6. Different: rename the scratch file over the target, report Outcome.CHANGED

The target is either fully replaced or left byte-identical; the scratch
file never outlives the call.
"""

import os
from collections.abc import Callable
from datetime import datetime, timezone

from scriptlib.config import Settings, get_settings
from scriptlib.core.diff_engine import compute_unified_diff
from scriptlib.core.file_io import (
    commit,
    compute_hash,
    files_identical,
    read_bytes,
    scratch_file,
    write_scratch,
)
from scriptlib.diagnostics import debug
from scriptlib.errors import ErrorCode, MissingFileError, TransformError
from scriptlib.models import EditResult, Outcome


def apply_transformation(
    path: str,
    transform: Callable[[str], str],
    *,
    operation: str,
    settings: Settings | None = None,
) -> EditResult:
    """Apply transform to the text of path and commit it only if it differs.

    Args:
        path: File to transform
        transform: Function mapping the current text to the candidate text
        operation: Name used in diagnostics and error messages
        settings: Settings providing encoding and scratch file options

    Returns:
        EditResult with Outcome.CHANGED or Outcome.UNCHANGED

    Raises:
        MissingFileError: If path is not a regular file
        TransformError: If the file cannot be read, decoded, staged or committed,
            or if transform itself raises one (e.g. InvalidPatternError)
    """
    if settings is None:
        settings = get_settings()
    encoding = settings.edit.encoding

    if not os.path.isfile(path):
        raise MissingFileError(f"{operation}: file not found: {path}", path=path)

    original_bytes = read_bytes(path)
    try:
        original = original_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise TransformError(
            f"{operation}: failed to decode {path} with encoding '{encoding}': {e}",
            error_code=ErrorCode.ENCODING_ERROR,
            path=path,
        ) from e

    candidate = transform(original)

    try:
        candidate_bytes = candidate.encode(encoding)
    except (UnicodeEncodeError, LookupError) as e:
        raise TransformError(
            f"{operation}: failed to encode result for {path} with encoding '{encoding}': {e}",
            error_code=ErrorCode.ENCODING_ERROR,
            path=path,
        ) from e

    previous_hash = compute_hash(original_bytes)

    with scratch_file(path, prefix=settings.edit.scratch_prefix) as tmp_path:
        write_scratch(tmp_path, candidate_bytes)

        if files_identical(tmp_path, path):
            debug(f"{operation}: {path} unchanged")
            return EditResult(
                outcome=Outcome.UNCHANGED,
                path=path,
                previous_hash=previous_hash,
                hash=previous_hash,
                timestamp=datetime.now(timezone.utc).isoformat(),
            )

        diff = compute_unified_diff(
            original,
            candidate,
            context_lines=settings.edit.diff_context_lines,
            fromfile=path,
            tofile=f"{path} ({operation})",
        )
        commit(tmp_path, path, preserve_mode=settings.edit.preserve_mode)

    debug(f"{operation}: updated {path}\n{diff.content}")
    return EditResult(
        outcome=Outcome.CHANGED,
        path=path,
        previous_hash=previous_hash,
        hash=compute_hash(candidate_bytes),
        diff=diff,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
