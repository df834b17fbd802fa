"""Common command-line flag handling shared by every script.

process_common_arguments() pulls the global flags out of an argument vector
and hands back everything else untouched, in order:

    --verbose, -v   verbose output
    --debug         verbose output plus call locations
    --dry-run       report instead of acting (the caller checks the flag)
    -h, --help      usage requested

--verbose, -v and --debug are consumed only while the flags are not yet
verbose. A second occurrence stays in the remaining arguments so it can be
forwarded to a nested command as one of that command's own arguments.
"""

import os
from collections.abc import MutableMapping, Sequence
from dataclasses import dataclass, field

from scriptlib.config import ProcessFlags

VERBOSE_TOKENS = ("--verbose", "-v")
DEBUG_TOKEN = "--debug"
DRY_RUN_TOKEN = "--dry-run"
HELP_TOKENS = ("-h", "--help")


@dataclass(frozen=True)
class ParsedArguments:
    """Flags after parsing plus the arguments that were not recognized."""

    flags: ProcessFlags
    remaining: list[str] = field(default_factory=list)


def process_common_arguments(
    args: Sequence[str],
    flags: ProcessFlags | None = None,
) -> ParsedArguments:
    """Extract the common flags from args.

    Args:
        args: Argument vector, without the program name
        flags: Starting flags (default: inherited from the environment).
            Not modified; an updated copy is returned.

    Returns:
        ParsedArguments with the updated flags and the pass-through arguments
    """
    if flags is None:
        flags = ProcessFlags()
    state = flags.model_dump()
    remaining: list[str] = []

    for token in args:
        if not state["verbose"] and token in VERBOSE_TOKENS:
            state["verbose"] = True
        elif not state["verbose"] and token == DEBUG_TOKEN:
            state["verbose"] = True
            state["debug"] = True
        elif token == DRY_RUN_TOKEN:
            state["dry_run"] = True
        elif token in HELP_TOKENS:
            state["help"] = True
        else:
            remaining.append(token)

    return ParsedArguments(flags=flags.model_copy(update=state), remaining=remaining)


def export_flags(
    flags: ProcessFlags,
    environ: MutableMapping[str, str] | None = None,
) -> MutableMapping[str, str]:
    """Publish flags as environment variables so child processes inherit them.

    Args:
        flags: Flags to publish
        environ: Mapping to update (default: os.environ)

    Returns:
        The updated mapping
    """
    if environ is None:
        environ = os.environ
    environ.update(flags.to_environ())
    return environ
