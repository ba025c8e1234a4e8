"""
SCSS Selector Grammar

    selector_list   = selector ("," ","* selector)*
    selector        = (combinator | compound)+
    compound        = ["*"] fragment*

Fragments are scanned without whitespace between them; the scan stops at
any of `{ , ; } @`. Raw content inside `[...]` and pseudo arguments is
captured verbatim with open_string().
"""

from typing import List, Optional

from scssparse.parser.expression import ExpressionParser
from scssparse.parser.nodes import (
    AttributeSelector,
    ClassName,
    Combinator,
    CompoundSelector,
    ElementName,
    IdName,
    Placeholder,
    PseudoSelector,
    RawFragment,
    Selector,
    SelfReference,
)


FRAGMENT_STOP_CHARS = frozenset('{,;}@')

ESCAPE_PATTERN = r'\\\S'
# `/deep/` style combinators
DEEP_COMBINATOR_PATTERN = r'/[\w\-]+/'


class SelectorParser(ExpressionParser):
    """Selector layer of the parser."""

    def selectors(self) -> Optional[List[Selector]]:
        """Comma separated selector list; repeated commas are ignored."""
        selectors = []

        while True:
            sel = self.selector()
            if sel is None:
                break
            selectors.append(sel)

            if not self.match_char(','):
                break

            while self.match_char(','):
                pass

        if not selectors:
            return None
        return selectors

    def selector(self) -> Optional[Selector]:
        """Whitespace separated sequence of compound selectors and combinators."""
        parts = []

        while True:
            char = self._current()
            if char is None:
                break

            if char == '>' and self._char_at(self.count + 1) == '>':
                parts.append(Combinator(token='>>'))
                self.count += 2
                self.whitespace()
                continue

            if char in ('>', '+', '~'):
                parts.append(Combinator(token=char))
                self.count += 1
                self.whitespace()
                continue

            compound = self.selector_single()
            if compound is not None:
                parts.append(compound)
                self.whitespace()
                continue

            if char == '/':
                m = self.match(DEEP_COMBINATOR_PATTERN)
                if m:
                    parts.append(Combinator(token=m.group(0)))
                    continue

            break

        if not parts:
            return None
        return Selector(parts=parts)

    def selector_single(self) -> Optional[CompoundSelector]:
        """
        Parse the fragments of one compound selector, e.g.

            div[yes=no]#something.hello.world:nth-child(-2n+1)%placeholder
        """
        old_white = self.eat_white_default
        self.eat_white_default = False

        parts = []

        if self.match_char('*', False):
            parts.append(ElementName(name='*'))

        while True:
            char = self._current()
            if char is None or char in FRAGMENT_STOP_CHARS:
                break

            s = self.count

            if char == '&':
                parts.append(SelfReference())
                self.count += 1
                continue

            if char == '|':
                parts.append(RawFragment(text='|'))
                self.count += 1
                continue

            if char == '.':
                self.count += 1
                name = self.keyword()
                if name is not None:
                    parts.append(ClassName(name=name))
                else:
                    parts.append(RawFragment(text='.'))
                continue

            if char == '\\':
                m = self.match(ESCAPE_PATTERN)
                if m:
                    parts.append(RawFragment(text=m.group(0)))
                    continue

            if char == '%':
                self.count += 1
                name = self.placeholder()
                if name is not None:
                    parts.append(Placeholder(name=name))
                    continue
                self.seek(s)
                break

            # id or interpolation
            if char == '#':
                inter = self.interpolation()
                if inter is not None:
                    parts.append(inter)
                    continue

                self.count += 1
                name = self.keyword()
                if name is not None:
                    parts.append(IdName(name=name))
                else:
                    parts.append(RawFragment(text='#'))
                continue

            if char == ':':
                if self._char_at(self.count + 1) == ':':
                    self.count += 2
                    prefix = '::'
                else:
                    self.count += 1
                    prefix = ':'

                name_parts = self.mixed_keyword()
                if name_parts is not None:
                    pseudo = PseudoSelector(prefix=prefix, name=name_parts)

                    ss = self.count
                    if self.match_char('('):
                        arg = self.open_string(')', '(')
                        if self.match_char(')'):
                            pseudo.argument = arg
                            pseudo.has_parens = True
                        else:
                            self.seek(ss)

                    parts.append(pseudo)
                    continue

            self.seek(s)

            if char == '[' and self.match_char('['):
                content = self.open_string(']', '[')
                if self.match_char(']'):
                    parts.append(AttributeSelector(content=content))
                    continue

            self.seek(s)

            # keyframe stops: 0%, 50%, 100%
            number = self.unit(char)
            if number is not None:
                parts.append(number)
                continue

            name = self.keyword_char(char)
            if name is not None:
                parts.append(ElementName(name=name))
                continue

            break

        self.eat_white_default = old_white

        if not parts:
            return None
        return CompoundSelector(fragments=parts)
