"""Replace one file with another, materially different one."""

import os
from datetime import datetime, timezone

from scriptlib.config import Settings, get_settings
from scriptlib.core import compute_hash, files_identical, read_bytes, safe_rename
from scriptlib.diagnostics import debug, debug_arguments
from scriptlib.errors import (
    CommitError,
    IdenticalContentError,
    MissingArgumentError,
    MissingFileError,
)
from scriptlib.models import EditResult, Outcome


def move(source: str, destination: str, settings: Settings | None = None) -> EditResult:
    """
    Move source over destination.

    Both files must exist. Unlike the other primitives, identical content is
    an error here: the point of the call is to replace destination with
    something different.

    Args:
        source: File holding the new content; removed on success
        destination: Existing file to replace
        settings: Settings providing redaction rules and the scratch prefix

    Returns:
        EditResult with Outcome.CHANGED

    Raises:
        MissingArgumentError: If source or destination is empty
        MissingFileError: If source or destination is not a regular file
        IdenticalContentError: If both files hold the same bytes (neither is touched)
        CommitError: If the rename fails
    """
    if settings is None:
        settings = get_settings()
    debug_arguments(source, destination, settings=settings)

    if not source:
        raise MissingArgumentError("move: source file not specified")
    if not os.path.isfile(source):
        raise MissingFileError(f"move: source file not found: {source}", path=source)
    if not destination:
        raise MissingArgumentError(f"move: destination file not specified (source: {source})")
    if not os.path.isfile(destination):
        raise MissingFileError(
            f"move: destination file not found: {destination} (source: {source})",
            path=destination,
        )

    if files_identical(source, destination):
        raise IdenticalContentError(
            f"move: {source} and {destination} are identical",
            path=destination,
        )

    previous_hash = compute_hash(read_bytes(destination))

    try:
        cross_filesystem = safe_rename(source, destination, prefix=settings.edit.scratch_prefix)
    except OSError as e:
        raise CommitError(
            f"move: failed to move {source} to {destination}: {e}",
            path=destination,
        ) from e

    if cross_filesystem:
        debug(f"move: copied {source} across filesystems")
    debug(f"move: replaced {destination} with {source}")

    return EditResult(
        outcome=Outcome.CHANGED,
        path=destination,
        previous_hash=previous_hash,
        hash=compute_hash(read_bytes(destination)),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
