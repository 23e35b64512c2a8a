"""Parse shell scripts with tree-sitter and extract command spans."""

from typing import Iterator

import tree_sitter_bash
from tree_sitter import Language, Node, Parser, Tree

# Grammar designation for a simple command
COMMAND_NODE_TYPE = "command"


class ParseError(Exception):
    """The bash grammar could not be loaded or the source could not be parsed."""


def get_parser() -> Parser:
    """Create a tree-sitter parser bound to the bash grammar."""
    try:
        language = Language(tree_sitter_bash.language())
        return Parser(language)
    except ValueError as e:
        raise ParseError(f"failed to load bash parser: {e}") from e


def parse_script(code: str) -> Tree:
    """
    Parse bash source into a syntax tree.

    Syntax errors in the script are not fatal: the grammar recovers and
    produces ERROR nodes. Only a parser failure raises ParseError.
    """
    parser = get_parser()
    try:
        tree = parser.parse(code.encode("utf-8"))
    except ValueError as e:
        raise ParseError(f"failed to parse bash code: {e}") from e
    if tree is None:
        raise ParseError("failed to parse bash code")
    return tree


def extract_commands(root_node: Node, source: bytes) -> list[str]:
    """
    Extract the text of every command node below root_node.

    Walks all named nodes, descending into every named child whether or not
    its parent is a command, so commands nested in pipelines, lists,
    subshells, loops and substitutions are all found.

    Args:
        root_node: Node to start the walk from (usually the tree root)
        source: The exact bytes the tree was parsed from

    Returns:
        Command texts in document order
    """
    commands = []

    stack = [root_node]
    while stack:
        node = stack.pop()
        if node.is_named and node.type == COMMAND_NODE_TYPE:
            commands.append(source[node.start_byte:node.end_byte].decode("utf-8"))
        # Reversed so the leftmost child is popped first
        stack.extend(reversed(node.named_children))

    return commands


def parse_and_extract_commands(code: str) -> list[str]:
    """Parse code as bash and extract its commands."""
    tree = parse_script(code)
    return extract_commands(tree.root_node, code.encode("utf-8"))


def dump_tree(node: Node, source: bytes, level: int = 0) -> Iterator[str]:
    """Yield one indented line per node with its kind and source text."""
    indent = "  " * level
    text = source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
    yield f"{indent}Kind: {node.type}, Text: '{text}'"
    for child in node.children:
        yield from dump_tree(child, source, level + 1)
