"""Unwrap indirect shell invocations like `sh -c "mycmd ..."`."""

import logging
import shlex

from shextract.parser import ParseError, parse_and_extract_commands

logger = logging.getLogger(__name__)

# Only bare names match: /bin/bash is not unwrapped
SHELL_COMMANDS = frozenset({"bash", "sh"})

COMMAND_STRING_FLAG = "-c"


def get_embedded_code(command: str) -> str | None:
    """
    Return the script passed to `bash -c` / `sh -c`, or None.

    Arguments after the script string are positional parameters for the
    inner shell and are ignored.
    """
    try:
        words = shlex.split(command)
    except ValueError:
        logger.debug("Not resolving %r: malformed quoting", command)
        return None

    if len(words) < 3:
        return None
    if words[0] not in SHELL_COMMANDS or words[1] != COMMAND_STRING_FLAG:
        return None

    return words[2]


def resolve_embedded_code(command: str) -> list[str] | None:
    """
    Resolve a command of the form `sh -c "mycmd ..."` into its inner commands.

    Args:
        command: Text of a single command

    Returns:
        Commands found in the embedded script, or None if the command is not
        an indirect shell invocation (or its script cannot be parsed)
    """
    code = get_embedded_code(command)
    if code is None:
        return None

    try:
        return parse_and_extract_commands(code)
    except ParseError as e:
        logger.debug("Not resolving %r: %s", command, e)
        return None
