"""Flatten a script into the leaf commands it runs."""

import logging

from shextract.cleaner import clean_command
from shextract.parser import parse_and_extract_commands
from shextract.resolver import get_embedded_code, resolve_embedded_code

logger = logging.getLogger(__name__)

# How many nested `sh -c` levels are unwrapped before giving up
DEFAULT_MAX_DEPTH = 32


def flatten_commands(
    commands: list[str],
    max_depth: int | None = DEFAULT_MAX_DEPTH,
) -> list[str]:
    """
    Replace every indirect shell invocation with the commands inside it.

    Works through an explicit stack rather than recursion. Inner commands
    take the place of the invocation that embedded them, so the result stays
    in document order.

    Args:
        commands: Top-level commands in document order
        max_depth: Nesting depth after which invocations are kept as leaves.
            None or 0 means unlimited.

    Returns:
        Leaf commands in document order
    """
    stack = [(command, 0) for command in commands]
    leaves = []

    while stack:
        command, depth = stack.pop()

        if max_depth and depth >= max_depth:
            if get_embedded_code(command) is not None:
                logger.warning(
                    "Not unwrapping %r: nested more than %d levels deep",
                    command, max_depth,
                )
            leaves.append(command)
            continue

        inner = resolve_embedded_code(command)
        if inner is None:
            leaves.append(command)
        else:
            stack.extend((inner_command, depth + 1) for inner_command in inner)

    # Popped last-first, so the leaves were collected backwards
    leaves.reverse()
    return leaves


def extract_script(
    code: str,
    clean: bool = False,
    max_depth: int | None = DEFAULT_MAX_DEPTH,
) -> list[str]:
    """
    Extract the flattened list of commands from a bash script.

    Args:
        code: Script source
        clean: Normalize each command with clean_command
        max_depth: See flatten_commands

    Returns:
        Leaf commands in document order

    Raises:
        ParseError: If the top-level script cannot be parsed
    """
    commands = flatten_commands(parse_and_extract_commands(code), max_depth)
    if clean:
        commands = [clean_command(command) for command in commands]
    return commands
