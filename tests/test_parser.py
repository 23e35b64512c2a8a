"""Tests for the tree-sitter command walker."""

import pytest

from shextract.parser import (
    ParseError,
    dump_tree,
    extract_commands,
    parse_and_extract_commands,
    parse_script,
)


class TestParseAndExtractCommands:
    """Test command extraction from whole scripts."""

    def test_empty(self):
        assert parse_and_extract_commands("") == []

    def test_comment_only(self):
        assert parse_and_extract_commands("# nothing to see here\n") == []

    def test_assignment_only(self):
        assert parse_and_extract_commands("FOO=bar\n") == []

    def test_simple_command(self):
        assert parse_and_extract_commands("ls -la") == ["ls -la"]

    def test_control_operators(self):
        assert parse_and_extract_commands("a&&b||c|d") == ["a", "b", "c", "d"]

    def test_semicolon(self):
        assert parse_and_extract_commands("cd /tmp; ls") == ["cd /tmp", "ls"]

    def test_multiple_lines(self):
        result = parse_and_extract_commands("echo one\necho two\n")
        assert result == ["echo one", "echo two"]

    def test_assignment_prefix(self):
        result = parse_and_extract_commands("FOO=bar python script.py")
        assert result == ["FOO=bar python script.py"]

    def test_redirect_not_included(self):
        assert parse_and_extract_commands("cat foo > bar") == ["cat foo"]

    def test_subshell(self):
        assert parse_and_extract_commands("(cd /tmp && ls)") == ["cd /tmp", "ls"]

    def test_if_statement(self):
        result = parse_and_extract_commands("if true; then echo hi; fi")
        assert result == ["true", "echo hi"]

    def test_for_loop(self):
        result = parse_and_extract_commands('for f in *; do rm "$f"; done')
        assert result == ['rm "$f"']

    def test_brace_group_in_pipeline(self):
        result = parse_and_extract_commands("make |& { tee log | wc -l; }")
        assert result == ["make", "tee log", "wc -l"]

    def test_command_substitution_after_outer(self):
        result = parse_and_extract_commands('echo "$(date)"')
        assert result == ['echo "$(date)"', "date"]

    def test_multibyte_text(self):
        result = parse_and_extract_commands("echo héllo && ls")
        assert result == ["echo héllo", "ls"]

    def test_embedded_code_not_unwrapped(self):
        result = parse_and_extract_commands('sh -c "x;y"')
        assert result == ['sh -c "x;y"']


class TestExtractCommands:
    def test_from_subtree(self):
        code = "a; (b && c)"
        tree = parse_script(code)
        subshell = tree.root_node.named_children[-1]
        assert extract_commands(subshell, code.encode()) == ["b", "c"]


class TestParseScript:
    def test_syntax_error_is_not_fatal(self):
        tree = parse_script("if then fi ((")
        assert tree.root_node.has_error

    def test_parser_failure(self, monkeypatch):
        from shextract import parser

        def broken_language(*args):
            raise ValueError("incompatible language version")

        monkeypatch.setattr(parser, "Language", broken_language)
        with pytest.raises(ParseError):
            parse_script("ls")


class TestDumpTree:
    def test_root_and_command(self):
        code = "ls"
        lines = list(dump_tree(parse_script(code).root_node, code.encode()))
        assert lines[0] == "Kind: program, Text: 'ls'"
        assert lines[1] == "  Kind: command, Text: 'ls'"

    def test_includes_unnamed_nodes(self):
        code = "a && b"
        lines = list(dump_tree(parse_script(code).root_node, code.encode()))
        assert any(line.strip() == "Kind: &&, Text: '&&'" for line in lines)

    def test_text_always_single_quoted(self):
        code = "echo 'hi'"
        lines = list(dump_tree(parse_script(code).root_node, code.encode()))
        assert lines[1] == "  Kind: command, Text: 'echo 'hi''"
