"""
Tests for the scanner primitives.
"""

import pytest

from scssparse.parser.scanner import ParseError, Scanner, normalize_comment


def scanner_for(text: str, **kwargs) -> Scanner:
    sc = Scanner(**kwargs)
    sc.reset(text)
    return sc


class TestMatching:
    """Test the advance-on-success contract."""

    def test_match_advances_and_eats_whitespace(self):
        sc = scanner_for("foo   bar")
        m = sc.match(r'foo')
        assert m.group(0) == "foo"
        assert sc.count == 6

    def test_match_without_whitespace(self):
        sc = scanner_for("foo   bar")
        sc.match(r'foo', False)
        assert sc.count == 3

    def test_failed_match_keeps_cursor(self):
        sc = scanner_for("foo bar")
        assert sc.match(r'bar') is None
        assert sc.count == 0

    def test_literal_is_case_sensitive(self):
        sc = scanner_for("Foo")
        assert not sc.literal("foo")
        assert sc.literal("Foo")

    def test_match_char(self):
        sc = scanner_for("; x")
        assert not sc.match_char(':')
        assert sc.match_char(';')
        assert sc.count == 2

    def test_peek_does_not_move(self):
        sc = scanner_for("abc")
        assert sc.peek(r'ab') is not None
        assert sc.count == 0

    def test_seek(self):
        sc = scanner_for("abc")
        mark = sc.save()
        sc.match(r'ab')
        sc.seek(mark)
        assert sc.count == 0


class TestWhitespace:
    """Test whitespace and comment skipping."""

    def test_line_comment_dropped(self):
        sc = scanner_for("// hi\n  x")
        assert sc.whitespace()
        assert sc._current() == "x"

    def test_block_comment_skipped(self):
        sc = scanner_for("/* a */x")
        assert sc.whitespace()
        assert sc._current() == "x"

    def test_block_comment_hook(self):
        seen = []

        class Recording(Scanner):
            def _on_comment(self, offset, text):
                seen.append((offset, text))

        sc = Recording()
        sc.reset("  /* a */ /* b */x")
        sc.whitespace()
        assert seen == [(2, "/* a */"), (10, "/* b */")]

    def test_nothing_to_skip(self):
        sc = scanner_for("x")
        assert not sc.whitespace()
        assert sc.count == 0

    def test_lone_slash_is_not_whitespace(self):
        sc = scanner_for("/ x")
        assert not sc.whitespace()
        assert sc.count == 0

    def test_normalize_comment(self):
        assert normalize_comment("/* a\n     b */") == "/* a\n b */"
        assert normalize_comment("/* one line */") == "/* one line */"


class TestMatchString:
    """Test the nearest-token string scan."""

    def test_interpolation_first(self):
        sc = scanner_for('abc#{x}"')
        assert sc.match_string('"') == ("abc", "#{")
        assert sc.count == 5

    def test_backslash_first(self):
        sc = scanner_for('a\\"b"')
        assert sc.match_string('"') == ("a", "\\")

    def test_delimiter(self):
        sc = scanner_for("it's")
        assert sc.match_string("'") == ("it", "'")

    def test_no_token(self):
        sc = scanner_for("abc")
        assert sc.match_string('"') is None
        assert sc.count == 0


class TestWords:
    """Test keywords, placeholders and variables."""

    def test_keyword_with_flag(self):
        sc = scanner_for("!default x")
        assert sc.keyword() == "!default"

    def test_keyword_stops_at_colon(self):
        sc = scanner_for("font-size: 1px")
        assert sc.keyword() == "font-size"
        assert sc._current() == ":"

    def test_keyword_char_rejects(self):
        sc = scanner_for(":hover")
        assert sc.keyword_char(":") is None
        assert sc.keyword_char(None) is None

    def test_unicode_keyword(self):
        assert scanner_for("café x").keyword() == "café"

    def test_ascii_mode(self):
        assert scanner_for("café x", encoding="latin-1").keyword() == "caf"

    def test_placeholder(self):
        assert scanner_for("button-base {").placeholder() == "button-base"
        assert scanner_for("#{$name} {").placeholder() == "#{$name}"

    def test_variable(self):
        sc = scanner_for("$foo-bar: 1")
        var = sc.variable()
        assert var.name == "foo-bar"
        assert sc._current() == ":"

    def test_variable_needs_name(self):
        sc = scanner_for("$ x")
        assert sc.variable() is None
        assert sc.count == 0


class TestEnd:
    """Test the statement terminator rule."""

    def test_end_of_buffer(self):
        assert scanner_for("").end()

    def test_closing_brace_not_consumed(self):
        sc = scanner_for("}")
        assert sc.end()
        assert sc.count == 0

    def test_semicolon_consumed(self):
        sc = scanner_for("; x")
        assert sc.end()
        assert sc.count == 2

    def test_other(self):
        assert not scanner_for("x").end()


class TestParseError:
    """Test error reporting."""

    def test_error_message(self):
        sc = scanner_for("a\nbad stuff\nc")
        sc.seek(2)
        with pytest.raises(ParseError) as exc_info:
            sc.throw_parse_error()
        err = exc_info.value
        assert err.line == 2
        assert err.column == 0
        assert str(err) == "parse error: failed at `bad stuff` (stdin) on line 2"

    def test_error_at_end(self):
        sc = scanner_for("abc", source_name="main.scss")
        sc.seek(3)
        with pytest.raises(ParseError) as exc_info:
            sc.throw_parse_error("unclosed block")
        assert str(exc_info.value) == "unclosed block: main.scss on line 1"
