"""
SCSS Parser

Statement and directive grammar on top of the selector and expression
layers, plus the public entry points.

The document is consumed one chunk at a time; parse_chunk() tries, in
order: a directive, legacy `<!--`/`-->` markers, a stray `;`, a closing
`}`, a variable assignment, a selector list opening a block, a property
assignment and finally a nested property block. Every alternative
restores the cursor when it fails, so the first one that matches wins.

Output is a Block tree rooted at the document root:

    root = parse_source("a { b { c: 1; } }")
    root.get_blocks()[0].selectors      # [Selector(a)]
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from scssparse.config import ParserConfig, get_config
from scssparse.parser.nodes import (
    AtRootBlock,
    Block,
    Break,
    Charset,
    Comment,
    CompoundSelector,
    Continue,
    Debug,
    DirectiveBlock,
    EachBlock,
    ElementName,
    ElseBlock,
    ElseIfBlock,
    Error,
    Extend,
    ForBlock,
    FunctionBlock,
    IfBlock,
    Import,
    ImportOnce,
    Include,
    IncludeBlock,
    KeywordValue,
    ListValue,
    MediaBlock,
    MediaExpression,
    MediaType,
    MixinBlock,
    MixinContent,
    NestedPropertyBlock,
    NullValue,
    PropertyAssignment,
    Return,
    Selector,
    StringValue,
    VariableAssignment,
    Warn,
    WhileBlock,
)
from scssparse.parser.scanner import normalize_comment
from scssparse.parser.selector import SelectorParser
from scssparse.parser.tree import BlockTree

logger = logging.getLogger(__name__)


DIRECTIVE_PATTERN = r'@[a-zA-Z\-]+'
# CSS hacks allowed as the first character of a property name
PROPERTY_HACK_PATTERN = r'[:.#]'

ASSIGNMENT_FLAGS = ('!default', '!global')
OPTIONAL_FLAG = '!optional'

# Trailing control characters stripped from a document before parsing
TRAILING_CONTROL_CHARS = ''.join(chr(c) for c in range(0x20))

# Raised when nesting exceeds the interpreter recursion limit
NESTING_ERROR = 'nesting too deep'


def flatten_list(value: Any) -> Any:
    """Unwrap single element lists, recursively."""
    if isinstance(value, ListValue) and len(value.items) == 1:
        return flatten_list(value.items[0])
    return value


class Parser(SelectorParser):
    """
    Recursive-descent SCSS parser.

    One instance parses one buffer at a time; every entry point resets the
    cursor and the block tree. Use separate instances for concurrent parses.

    Backtracking is unbounded, so pathological input can be reparsed many
    times. Nesting depth is bounded by the interpreter recursion limit
    (a few hundred levels of parentheses); deeper input raises
    ParseError('nesting too deep').

    Usage:
        parser = Parser("style.scss")
        root = parser.parse(text)
        value = parser.parse_value("1px solid #fff")
        selectors = parser.parse_selector("a > b, .c")
    """

    def __init__(self, source_name: str = None, source_index: int = 0,
                 encoding: str = 'utf-8', keep_comments: bool = True):
        self.tree = BlockTree()
        self.charset: Optional[Charset] = None
        super().__init__(source_name, source_index, encoding)
        self.keep_comments = keep_comments

    def reset(self, text: str) -> None:
        super().reset(text)
        self.tree = BlockTree()
        self.charset = None

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def parse(self, text: str) -> Block:
        """Parse a whole stylesheet and return the root block."""
        self.reset(text.rstrip(TRAILING_CONTROL_CHARS))
        logger.debug(f"Parsing {self.source_name} ({self.length} chars)")

        root = self.push_block(Block(is_root=True), 0)
        self.whitespace()

        try:
            while self.parse_chunk():
                pass
        except RecursionError:
            self.throw_parse_error(NESTING_ERROR)

        if self.count != self.length:
            self.throw_parse_error()

        if self.tree.current is not root:
            self.throw_parse_error('unclosed block')

        self.tree.flush_comments()

        if self.charset is not None:
            root.children.insert(0, self.charset)

        logger.debug(f"Parsed {self.source_name}: {len(root.children)} top-level nodes, "
                     f"{len(self.tree.blocks)} blocks")
        return root

    def parse_value(self, text: str) -> Any:
        """Parse a standalone value list. Trailing input is ignored."""
        self.reset(text)

        try:
            value = self.value_list()
        except RecursionError:
            self.throw_parse_error(NESTING_ERROR)
        if value is None:
            self.throw_parse_error('expected a value')
        return value

    def parse_selector(self, text: str) -> List[Selector]:
        """Parse a standalone selector list. Trailing input is ignored."""
        self.reset(text)

        try:
            selectors = self.selectors()
        except RecursionError:
            self.throw_parse_error(NESTING_ERROR)
        if selectors is None:
            self.throw_parse_error('expected a selector')
        return selectors

    # -------------------------------------------------------------------------
    # Tree building
    # -------------------------------------------------------------------------

    def _tag(self, node: Any, pos: int) -> Any:
        """Record the source position of node."""
        node.line, node.column = self.get_source_position(pos)
        node.offset = pos
        node.source_index = self.source_index
        return node

    def _on_comment(self, offset: int, text: str) -> None:
        if not self.keep_comments:
            return
        comment = self._tag(Comment(text=normalize_comment(text)), offset)
        self.tree.queue_comment(comment)

    def push_block(self, block: Block, pos: int = 0) -> Block:
        return self.tree.push(self._tag(block, pos))

    def pop_block(self) -> Block:
        block = self.tree.pop()
        if block is None:
            self.throw_parse_error('unexpected }')
        return block

    def append(self, node: Any, pos: Optional[int] = None) -> None:
        """Append a statement to the current block, tagging it when pos is given."""
        if pos is not None:
            self._tag(node, pos)
        self.tree.append(node)

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def parse_chunk(self) -> bool:
        """
        Parse a single chunk off the head of the buffer and append it to the
        current block. Returns False at the end of the buffer or when
        nothing matches.
        """
        char = self._current()
        if char is None:
            return False

        s = self.count

        if char == '@':
            return self.parse_directive()

        # misc
        if char == '-' and self.literal('-->'):
            return True

        if char == '<' and self.literal('<!--'):
            return True

        # extra stuff
        if char == ';':
            self.count += 1
            self.whitespace()
            return True

        # closing a block
        if char == '}':
            self.count += 1
            self.whitespace()
            block = self.pop_block()

            if isinstance(block, IncludeBlock):
                include = block.include
                block.include = None
                include.content = block
                self.append(include)
            elif not block.dont_append:
                self.append(block)

            return True

        # variable assigns
        if char == '$':
            var = self.variable()
            if var is not None and self.match_char(':'):
                value = self.value_list()
                if value is not None and self.end():
                    value, flag = self.strip_assignment_flag(value)
                    self.append(VariableAssignment(name=var.name, value=value, flag=flag), s)
                    return True

            self.seek(s)

        # opening css block
        if self.expect_selector():
            selectors = self.selectors()
            if selectors is not None and self.match_char('{'):
                self.push_block(Block(selectors=selectors), s)
                return True

            self.seek(s)

        # property shortcut
        name = self.keyword_char(char, False)
        if name is not None and self.match_char(':'):
            value = self.value_list()
            if value is not None and self.end():
                self.append(PropertyAssignment(name=name, value=value), s)
                return True

        self.seek(s)

        # property assign, or nested assign
        prop = self.property_name()
        if prop is not None and self.match_char(':'):
            value = self.value_list()

            if self.match_char('{'):
                if value is not None:
                    self.append(PropertyAssignment(name=prop, value=value), s)
                self.push_block(NestedPropertyBlock(prefix=prop), s)
                return True

            if value is not None and self.end():
                self.append(PropertyAssignment(name=prop, value=value), s)
                return True

        self.seek(s)
        return False

    def expect_selector(self) -> bool:
        """
        Cheap check before trying selectors: does a `{` or a comment start
        before the next `}` (or the end of the buffer)?
        """
        next_close = self.buffer.find('}', self.count)
        if next_close == -1:
            next_close = self.length

        next_open = self.buffer.find('{', self.count)
        if next_open != -1 and next_open < next_close:
            return True

        next_comment = self.buffer.find('/*', self.count)
        if next_comment != -1 and next_comment < next_close:
            return True

        return False

    def property_name(self) -> Optional[StringValue]:
        """Property name made of keywords and interpolations, e.g. `border-#{$side}`."""
        parts = []

        old_white = self.eat_white_default
        self.eat_white_default = False

        while True:
            inter = self.interpolation()
            if inter is not None:
                parts.append(inter)
                continue

            text = self.keyword()
            if text is not None:
                parts.append(text)
                continue

            if not parts:
                m = self.match(PROPERTY_HACK_PATTERN, False)
                if m:
                    parts.append(m.group(0))
                    continue

            break

        self.eat_white_default = old_white

        if not parts:
            return None

        # comment hack: `width/**/: 1px`
        m = self.peek(self._comment_re)
        if m:
            parts.append(m.group(0))
            self.count = m.end()

        self.whitespace()

        return StringValue(quote='', parts=parts)

    def strip_assignment_flag(self, value: Any) -> Tuple[Any, Optional[str]]:
        """
        Remove a trailing `!default`/`!global` from the tail of value.

        The flag may sit at the end of a nested list (`a, b !default`);
        the list it is removed from is flattened. Returns (value, flag).
        """
        if not isinstance(value, ListValue) or not value.items:
            return value, None

        last = value.items[-1]
        if isinstance(last, KeywordValue) and last.name in ASSIGNMENT_FLAGS:
            value.items.pop()
            return flatten_list(value), last.name

        new_last, flag = self.strip_assignment_flag(last)
        if flag is not None:
            value.items[-1] = new_last
        return value, flag

    def strip_optional_flag(self, selectors: List[Selector]) -> bool:
        """Remove a trailing `!optional` from an @extend selector list."""
        parts = selectors[-1].parts
        last = parts[-1] if parts else None

        if (isinstance(last, CompoundSelector) and len(last.fragments) == 1
                and isinstance(last.fragments[0], ElementName)
                and last.fragments[0].name == OPTIONAL_FLAG):
            parts.pop()
            return True
        return False

    # -------------------------------------------------------------------------
    # Directives
    # -------------------------------------------------------------------------

    def parse_directive(self) -> bool:
        """Parse an `@` rule. Built-in directives are tried in a fixed order."""
        s = self.count

        m = self.match(DIRECTIVE_PATTERN)
        directive = m.group(0).lower() if m else ''
        ss = self.count

        if directive == '@at-root':
            selector = self.selectors()
            with_ = self.map()
            if self.match_char('{'):
                self.push_block(AtRootBlock(selector=selector, with_=with_), s)
                return True
            self.seek(ss)

        if directive == '@media':
            queries = self.media_query_list()
            if queries is not None and self.match_char('{'):
                self.push_block(MediaBlock(query_list=queries), s)
                return True
            self.seek(ss)

        if directive == '@mixin':
            name = self.keyword()
            if name is not None:
                args = self.argument_def()
                if self.match_char('{'):
                    self.push_block(MixinBlock(name=name, args=args), s)
                    return True
            self.seek(ss)

        if directive == '@include':
            name = self.keyword()
            if name is not None:
                args = None
                ps = self.count
                if self.match_char('('):
                    args = self.arg_values()
                    if not self.match_char(')'):
                        args = None
                        self.seek(ps)

                include = Include(name=name, args=args)

                if self.end():
                    self.append(include, s)
                    return True

                if self.match_char('{'):
                    self._tag(include, s)
                    self.push_block(IncludeBlock(include=include), s)
                    return True
            self.seek(ss)

        if directive == '@scssphp-import-once':
            path = self.value_list()
            if path is not None and self.end():
                self.append(ImportOnce(path=path), s)
                return True
            self.seek(ss)

        if directive == '@import':
            path = self.value_list()
            if path is not None and self.end():
                self.append(Import(path=path), s)
                return True
            self.seek(ss)

            path = self.url()
            if path is not None and self.end():
                self.append(Import(path=path), s)
                return True
            self.seek(ss)

        if directive == '@extend':
            selectors = self.selectors()
            if selectors is not None and self.end():
                optional = self.strip_optional_flag(selectors)
                self.append(Extend(selectors=selectors, optional=optional), s)
                return True
            self.seek(ss)

        if directive == '@function':
            name = self.keyword()
            if name is not None:
                args = self.argument_def()
                if args is not None and self.match_char('{'):
                    self.push_block(FunctionBlock(name=name, args=args), s)
                    return True
            self.seek(ss)

        if directive == '@break' and self.end():
            self.append(Break(), s)
            return True

        if directive == '@continue' and self.end():
            self.append(Continue(), s)
            return True

        if directive == '@return':
            value = self.value_list()
            if self.end():
                self.append(Return(value=value if value is not None else NullValue()), s)
                return True
            self.seek(ss)

        if directive == '@each':
            names = self.generic_list(self.variable, ',', False)
            if names is not None and self.literal('in'):
                lst = self.value_list()
                if lst is not None and self.match_char('{'):
                    self.push_block(EachBlock(vars=[v.name for v in names.items], list=lst), s)
                    return True
            self.seek(ss)

        if directive == '@while':
            cond = self.expression()
            if cond is not None and self.match_char('{'):
                self.push_block(WhileBlock(cond=cond), s)
                return True
            self.seek(ss)

        if directive == '@for':
            if self._parse_for(s):
                return True
            self.seek(ss)

        if directive == '@if':
            cond = self.value_list()
            if cond is not None and self.match_char('{'):
                self.push_block(IfBlock(cond=cond), s)
                return True
            self.seek(ss)

        if directive in ('@debug', '@warn', '@error'):
            value = self.value_list()
            if value is not None and self.end():
                cls = {'@debug': Debug, '@warn': Warn, '@error': Error}[directive]
                self.append(cls(value=value), s)
                return True
            self.seek(ss)

        if directive == '@content' and self.end():
            self.append(MixinContent(), s)
            return True

        # @else, @elseif, @else if
        if directive in ('@else', '@elseif'):
            if self._parse_else(directive, s):
                return True
            self.seek(ss)

        # only retain the first @charset directive encountered
        if directive == '@charset':
            value = self.value_list()
            if value is not None and self.end():
                if self.charset is None:
                    self.charset = self._tag(Charset(value=value), s)
                else:
                    logger.debug(f"Dropping duplicate @charset in {self.source_name}")
                return True
            self.seek(ss)

        self.seek(s)

        # doesn't match a built-in directive, do the generic one
        return self._parse_generic_directive(s)

    def _parse_for(self, s: int) -> bool:
        """`@for $var from <start> through|to <end> {`"""
        var = self.variable()
        if var is None or not self.literal('from'):
            return False

        start = self.expression()
        if start is None:
            return False

        if self.literal('through'):
            until = False
        elif self.literal('to'):
            until = True
        else:
            return False

        end = self.expression()
        if end is None or not self.match_char('{'):
            return False

        self.push_block(ForBlock(var=var.name, start=start, end=end, until=until), s)
        return True

    def _parse_else(self, directive: str, s: int) -> bool:
        """Attach an @else/@elseif block to the @if chain it follows."""
        last = self.tree.last()
        if not isinstance(last, IfBlock):
            return False

        if directive == '@else' and self.match_char('{'):
            block = ElseBlock()
        elif directive == '@elseif' or self.literal('if'):
            cond = self.value_list()
            if cond is None or not self.match_char('{'):
                return False
            block = ElseIfBlock(cond=cond)
        else:
            return False

        last.cases.append(block)
        self.push_block(block, s)
        return True

    def _parse_generic_directive(self, s: int) -> bool:
        """`@name [value] {` for directives without a dedicated rule."""
        if self.match_char('@', False):
            name = self.keyword()
            if name is not None:
                value = self.variable()
                if value is None:
                    value = self.open_string('{')

                if self.match_char('{'):
                    if name == 'media':
                        block = MediaBlock(value=value)
                    else:
                        block = DirectiveBlock(name=name, value=value)
                    logger.debug(f"Generic directive @{name} at offset {s}")
                    self.push_block(block, s)
                    return True

        self.seek(s)
        return False

    # -------------------------------------------------------------------------
    # Media queries
    # -------------------------------------------------------------------------

    def media_query_list(self) -> Optional[List[List[Any]]]:
        out = self.generic_list(self.media_query, ',', False)
        if out is not None:
            return out.items
        return None

    def media_query(self) -> List[Any]:
        """`[only|not] type [and (feature: value) ...]`; always succeeds."""
        parts = []
        s = self.count

        modifier = None
        if self.literal('only'):
            modifier = 'only'
        elif self.literal('not'):
            modifier = 'not'

        media_type = self.mixed_keyword()
        if media_type is not None:
            types = ListValue(delimiter='', items=[
                KeywordValue(name=t) if isinstance(t, str) else t for t in media_type
            ])
            parts.append(MediaType(modifiers=[modifier] if modifier else [], types=types))
        elif modifier is not None:
            self.seek(s)

        if not parts or self.literal('and'):
            expressions = self.generic_list(self.media_expression, 'and', False)
            if expressions is not None:
                parts.extend(expressions.items)

        return parts

    def media_expression(self) -> Optional[MediaExpression]:
        """`(feature[: value])`"""
        s = self.count

        if self.match_char('('):
            feature = self.expression()
            if feature is not None:
                value = None
                ss = self.count
                if self.match_char(':'):
                    value = self.expression()
                    if value is None:
                        self.seek(ss)

                if self.match_char(')'):
                    return MediaExpression(feature=feature, value=value)

        self.seek(s)
        return None


# =============================================================================
# Module-level entry points
# =============================================================================

def parse_document(source_name: Optional[str], source_index: int, encoding: str, text: str) -> Block:
    """Parse a full stylesheet. Raises ParseError on malformed input."""
    return Parser(source_name, source_index, encoding).parse(text)


def parse_source(text: str, source_name: str = "(stdin)", source_index: int = 0,
                 encoding: str = 'utf-8', keep_comments: bool = True) -> Block:
    """Parse stylesheet source into a block tree."""
    parser = Parser(source_name, source_index, encoding, keep_comments)
    return parser.parse(text)


def parse_value(text: str, encoding: str = 'utf-8') -> Any:
    """Parse a single value or value list, e.g. a variable given on the command line."""
    return Parser(encoding=encoding).parse_value(text)


def parse_selector_list(text: str, encoding: str = 'utf-8') -> List[Selector]:
    """Parse a comma separated selector list."""
    return Parser(encoding=encoding).parse_selector(text)


def read_source(filepath: Union[str, Path], encodings: List[str]) -> str:
    """Read a file, trying each encoding in turn."""
    data = Path(filepath).read_bytes()
    for encoding in encodings:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            logger.debug(f"{filepath} is not {encoding}, trying next encoding")
            continue
    # latin-1 always succeeds
    return data.decode('latin-1')


def parse_file(filepath: Union[str, Path], config: Optional[ParserConfig] = None,
               source_index: int = 0) -> Block:
    """Parse a stylesheet file into a block tree. Handles encoding fallback."""
    if config is None:
        config = get_config()

    source = read_source(filepath, config.file_encodings)
    parser = Parser(str(filepath), source_index, config.encoding, config.keep_comments)
    return parser.parse(source)
