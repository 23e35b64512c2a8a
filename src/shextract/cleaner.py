"""Normalize command text."""

import logging
import shlex

logger = logging.getLogger(__name__)


def squash_line_continuations(command: str) -> str:
    """Replace escaped newlines (LF and CRLF) with a single space."""
    return command.replace("\\\r\n", " ").replace("\\\n", " ")


def _requote(command: str) -> str:
    try:
        words = shlex.split(command)
    except ValueError:
        logger.debug("Cannot clean %r: malformed quoting", command)
        words = []
    return shlex.join(words)


def clean_command(command: str) -> str:
    """
    Squash escaped newlines and requote the command by splitting and rejoining.

    This is opinionated: comments, the original quoting style and internal
    formatting are lost. A command that cannot be split cleans to "".
    """
    cleaned = _requote(squash_line_continuations(command))
    # A word holding backslash-newline is requoted as-is; squash until stable
    while squash_line_continuations(cleaned) != cleaned:
        cleaned = _requote(squash_line_continuations(cleaned))
    return cleaned
