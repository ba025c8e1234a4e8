"""
SCSS Scanner / Matcher

Low-level cursor over the stylesheet buffer. Every matcher here follows the
same contract the grammar rules rely on: on success the cursor advances past
the match (optionally eating trailing whitespace and comments); on failure
the cursor is left exactly where it was.

Backtracking is done by the grammar with save()/seek() on the integer cursor.
"""

import re
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from scssparse.parser.nodes import VariableRef
from scssparse.parser.positions import SourcePositionIndex


# Base regex flags: case-insensitive, '.' matches newlines
BASE_FLAGS = re.IGNORECASE | re.DOTALL

# Identifier-ish words. Quotes and `!` are allowed so that `!default`,
# `!important` and the `*zoom` IE hack come through as keywords.
KEYWORD_PATTERN = r'(([\w\-*!"\']|\\.)([\w\-"\']|\\.)*)'
PLACEHOLDER_PATTERN = r'([\w\-]+|#\{\$[\w\-]+\})'
# `and`/`or` must not be the start of a longer word (`orange`, `android`)
OPERATOR_PATTERN = r'([*/%+-]|[!=]=|>=?|<=>|<=?|and(?![\w\-])|or(?![\w\-]))'
COMMENT_PATTERN = r'/\*.*?\*/'

# Characters that can never start a keyword in keyword_char()
KEYWORD_STOP_CHARS = frozenset(':#> ;(),{}.$&%')

WHITESPACE_CHARS = frozenset('\n\r\t ')


@lru_cache(maxsize=256)
def compile_pattern(pattern: str, flags: int) -> Pattern:
    """Compile (and cache) a grammar pattern."""
    return re.compile(pattern, flags)


def normalize_comment(text: str) -> str:
    """Strip the indentation of every comment line; continuation lines get one space."""
    text = re.sub(r'^\s+', '', text, flags=re.MULTILINE)
    text = re.sub(r'^(.)', r' \1', text, flags=re.MULTILINE)
    return text[1:]


class ParseError(Exception):
    """Error during parsing, annotated with the source name and line."""
    def __init__(self, message: str, source_name: str = None, line: int = 0,
                 column: int = 0, context: str = None):
        self.message = message
        self.source_name = source_name
        self.line = line
        self.column = column
        self.context = context

        loc = f"{source_name} on line {line}" if source_name else f"line: {line}"
        if context is not None:
            super().__init__(f"{message}: failed at `{context}` {loc}")
        else:
            super().__init__(f"{message}: {loc}")


class Scanner:
    """
    Cursor and matching primitives shared by all grammar layers.

    The buffer is immutable for the duration of a parse; `count` is the
    offset of the next unconsumed character.
    """

    def __init__(self, source_name: str = None, source_index: int = 0, encoding: str = 'utf-8'):
        self.source_name = source_name or '(stdin)'
        self.source_index = source_index
        self.utf8 = not encoding or encoding.lower() in ('utf-8', 'utf8')
        self.flags = BASE_FLAGS if self.utf8 else BASE_FLAGS | re.ASCII

        self._keyword_re = compile_pattern(KEYWORD_PATTERN, self.flags)
        self._placeholder_re = compile_pattern(PLACEHOLDER_PATTERN, self.flags)
        self.operator_re = compile_pattern(OPERATOR_PATTERN, self.flags)
        self._comment_re = compile_pattern(COMMENT_PATTERN, self.flags)

        self.reset('')

    def reset(self, text: str) -> None:
        """Start a new parse over text."""
        self.buffer = text
        self.length = len(text)
        self.count = 0
        self.in_parens = False
        self.eat_white_default = True
        self.positions = SourcePositionIndex(text)

    # -------------------------------------------------------------------------
    # Cursor
    # -------------------------------------------------------------------------

    def _current(self) -> Optional[str]:
        """Get current character or None if at end."""
        if self.count >= self.length:
            return None
        return self.buffer[self.count]

    def _char_at(self, pos: int) -> Optional[str]:
        if 0 <= pos < self.length:
            return self.buffer[pos]
        return None

    def save(self) -> int:
        return self.count

    def seek(self, where: int) -> None:
        self.count = where

    def get_source_position(self, pos: int) -> Tuple[int, int]:
        return self.positions.position(pos)

    def throw_parse_error(self, msg: str = 'parse error'):
        """Raise a ParseError pointing at the current cursor position."""
        line, column = self.get_source_position(self.count)
        context = None
        if self.count < self.length:
            nl = self.buffer.find('\n', self.count)
            context = self.buffer[self.count:] if nl == -1 else self.buffer[self.count:nl]
        raise ParseError(msg, self.source_name, line, column, context)

    # -------------------------------------------------------------------------
    # Matchers
    # -------------------------------------------------------------------------

    def _eat(self, eat_whitespace: Optional[bool]) -> None:
        if eat_whitespace is None:
            eat_whitespace = self.eat_white_default
        if eat_whitespace:
            self.whitespace()

    def match(self, pattern, eat_whitespace: Optional[bool] = None):
        """Match pattern anchored at the cursor. Returns the match object or None."""
        if isinstance(pattern, str):
            pattern = compile_pattern(pattern, self.flags)
        m = pattern.match(self.buffer, self.count)
        if m is None:
            return None
        self.count = m.end()
        self._eat(eat_whitespace)
        return m

    def peek(self, pattern, start: Optional[int] = None):
        """Anchored lookahead that never moves the cursor."""
        if isinstance(pattern, str):
            pattern = compile_pattern(pattern, self.flags)
        return pattern.match(self.buffer, self.count if start is None else start)

    def match_char(self, char: str, eat_whitespace: Optional[bool] = None) -> bool:
        """Match a single character."""
        if self.count >= self.length or self.buffer[self.count] != char:
            return False
        self.count += 1
        self._eat(eat_whitespace)
        return True

    def literal(self, what: str, eat_whitespace: Optional[bool] = None) -> bool:
        """Match an exact (case-sensitive) string."""
        if not self.buffer.startswith(what, self.count):
            return False
        self.count += len(what)
        self._eat(eat_whitespace)
        return True

    def whitespace(self) -> bool:
        """
        Consume spaces, tabs, newlines and comments.

        `//` comments are dropped; `/* */` comments are handed to
        _on_comment() with their start offset.
        """
        got_white = False
        buf = self.buffer

        while self.count < self.length:
            char = buf[self.count]

            if char == '/':
                char2 = self._char_at(self.count + 1)

                if char2 == '/':
                    end = buf.find('\n', self.count)
                    self.count = self.length if end == -1 else end
                    got_white = True
                    continue

                if char2 == '*':
                    m = self._comment_re.match(buf, self.count)
                    if m:
                        self._on_comment(self.count, m.group(0))
                        self.count = m.end()
                        got_white = True
                        continue

                break

            if char not in WHITESPACE_CHARS:
                break
            self.count += 1
            got_white = True

        return got_white

    def _on_comment(self, offset: int, text: str) -> None:
        """Hook for block comments found while skipping whitespace."""

    def match_string(self, delim: str) -> Optional[Tuple[str, str]]:
        """
        Scan string content up to the nearest of `#{`, a backslash, or delim.

        Returns (text, token) and moves the cursor past the token. A
        three-way find is used instead of one regex so very long strings
        do not hit regex backtracking limits.
        """
        end = self.length
        token = None

        for lookahead in ('#{', '\\', delim):
            pos = self.buffer.find(lookahead, self.count)
            if pos != -1 and pos < end:
                end = pos
                token = lookahead

        if token is None:
            return None

        text = self.buffer[self.count:end]
        self.count = end + len(token)
        return text, token

    def end(self) -> bool:
        """Consume an end-of-statement: end of buffer, a `}` (left in place) or `;`."""
        if self.count >= self.length:
            return True
        if self.buffer[self.count] == '}':
            return True
        return self.match_char(';')

    # -------------------------------------------------------------------------
    # Words
    # -------------------------------------------------------------------------

    def keyword(self, eat_whitespace: Optional[bool] = None) -> Optional[str]:
        m = self.match(self._keyword_re, eat_whitespace)
        if m:
            return m.group(1)
        return None

    def keyword_char(self, char: Optional[str], eat_whitespace: Optional[bool] = None) -> Optional[str]:
        """keyword() with a fast reject on characters that cannot start one."""
        if char is None or char in KEYWORD_STOP_CHARS:
            return None
        return self.keyword(eat_whitespace)

    def placeholder(self) -> Optional[str]:
        m = self.match(self._placeholder_re)
        if m:
            return m.group(1)
        return None

    def variable(self) -> Optional[VariableRef]:
        """Match `$name`."""
        s = self.count
        if self.match_char('$', False):
            name = self.keyword()
            if name is not None:
                return VariableRef(name=name)
        self.seek(s)
        return None
