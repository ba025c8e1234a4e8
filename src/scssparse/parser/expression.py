"""
SCSS Expression Grammar

Parses values: numbers, colors, strings with interpolation, variables,
function calls, maps, parenthesized lists and unary/binary operations.

Binary operators are resolved with precedence climbing (_exp_helper).
Grammar (roughly):

    value_list  = space_list ("," space_list)*
    space_list  = expression+
    expression  = "(" ")" | "(" value_list ")" | map | value op-tail
    value       = "not" value | "+" value | "-" (variable|number|paren)
                | paren | interpolation | color | variable | progid
                | string | number | keyword ["(" args ")"]
"""

import re
from typing import Any, Callable, List, Optional

from scssparse.parser.nodes import (
    Argument,
    BinaryOperation,
    BooleanValue,
    ColorValue,
    FunctionCall,
    Interpolation,
    KeywordValue,
    ListValue,
    MapValue,
    NullValue,
    NumberValue,
    ParameterDef,
    StringValue,
    UnaryOperation,
)
from scssparse.parser.scanner import Scanner, compile_pattern


# Operator binding strength, low to high
PRECEDENCE = {
    '=': 0,
    'or': 1,
    'and': 2,
    '==': 3,
    '!=': 3,
    '<=>': 3,
    '<=': 4,
    '>=': 4,
    '<': 4,
    '>': 4,
    '+': 5,
    '-': 5,
    '*': 6,
    '/': 6,
    '%': 6,
}

NUMBER_PATTERN = r'([0-9]*(\.)?[0-9]+)([%a-zA-Z]+)?'
COLOR_PATTERN = r'(#([0-9a-f]{6})|#([0-9a-f]{3}))'
URL_PATTERN = r'(url\(\s*(["\']?)([^)]+)\2\s*\))'

# Functions whose arguments are kept as raw text
CALC_RE = re.compile(r'^(-[a-z]+-)?calc$')

DIGITS = frozenset('0123456789')


def _to_number(text: str):
    if '.' in text:
        return float(text)
    return int(text)


class ExpressionParser(Scanner):
    """Expression layer of the parser. See module docstring for the grammar."""

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    def generic_list(self, parse_item: Callable[[], Optional[Any]], delim: str = '',
                     flatten: bool = True) -> Optional[Any]:
        """
        Parse one or more items separated by delim ('' means juxtaposed).

        A single item is returned unwrapped when flatten is True; otherwise
        the result is always a ListValue.
        """
        s = self.count
        items = []

        while True:
            item = parse_item()
            if item is None:
                break
            items.append(item)

            if delim and not self.literal(delim):
                break

        if not items:
            self.seek(s)
            return None

        if flatten and len(items) == 1:
            return items[0]
        return ListValue(delimiter=delim, items=items)

    def value_list(self) -> Optional[Any]:
        """Comma separated list of space lists."""
        return self.generic_list(self.space_list, ',')

    def space_list(self) -> Optional[Any]:
        return self.generic_list(self.expression)

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def expression(self) -> Optional[Any]:
        s = self.count

        if self.match_char('('):
            if self.match_char(')'):
                return ListValue(delimiter='', items=[])

            out = self.value_list()
            if out is not None and self.match_char(')') and isinstance(out, ListValue):
                return out

            self.seek(s)

            out = self.map()
            if out is not None:
                return out

            self.seek(s)

        lhs = self.value()
        if lhs is not None:
            return self._exp_helper(lhs, 0)

        return None

    def _white_before(self) -> bool:
        ch = self._char_at(self.count - 1)
        return ch is not None and ch.isspace()

    def _exp_helper(self, lhs: Any, min_p: int) -> Any:
        """Precedence climbing over the binary operators following lhs."""
        ss = self.count
        white_before = self._white_before()

        while True:
            m = self.match(self.operator_re, False)
            if m is None:
                break
            op = m.group(1).lower()
            if PRECEDENCE[op] < min_p:
                break

            nxt = self._current()
            white_after = nxt is not None and nxt.isspace()
            var_after = nxt == '$'

            self.whitespace()

            # `a -1` is a list of `a` and a negative number, not a subtraction
            if op == '-' and white_before and not white_after and not var_after:
                break

            rhs = self.value()
            if rhs is None:
                break

            # peek and see if rhs belongs to the next operator
            nm = self.peek(self.operator_re)
            if nm and PRECEDENCE[nm.group(1).lower()] > PRECEDENCE[op]:
                rhs = self._exp_helper(rhs, PRECEDENCE[nm.group(1).lower()])

            lhs = BinaryOperation(
                op=op,
                left=lhs,
                right=rhs,
                in_parens=self.in_parens,
                white_before=white_before,
                white_after=white_after,
            )
            ss = self.count
            white_before = self._white_before()

        self.seek(ss)
        return lhs

    def value(self) -> Optional[Any]:
        """Parse a single operand, dispatching on its first character."""
        char = self._current()
        if char is None:
            return None

        s = self.count

        # not
        if char == 'n' and self.literal('not', False):
            if self.whitespace():
                inner = self.value()
                if inner is not None:
                    return UnaryOperation(op='not', operand=inner, in_parens=self.in_parens)

            self.seek(s + 3)
            inner = self.paren_value()
            if inner is not None:
                return UnaryOperation(op='not', operand=inner, in_parens=self.in_parens)

            self.seek(s)

        # addition
        if char == '+':
            self.count += 1
            inner = self.value()
            if inner is not None:
                return UnaryOperation(op='+', operand=inner, in_parens=self.in_parens)
            self.count -= 1
            return None

        # negation
        if char == '-':
            self.count += 1
            inner = self.variable()
            if inner is None:
                inner = self.unit('1')
            if inner is None:
                inner = self.paren_value()
            if inner is not None:
                return UnaryOperation(op='-', operand=inner, in_parens=self.in_parens)
            self.count -= 1

        if char == '(':
            out = self.paren_value()
            if out is not None:
                return out

        if char == '#':
            out = self.interpolation()
            if out is None:
                out = self.color()
            if out is not None:
                return out

        if char == '$':
            out = self.variable()
            if out is not None:
                return out

        if char == 'p':
            out = self.progid()
            if out is not None:
                return out

        if char in ('"', "'"):
            out = self.string()
            if out is not None:
                return out

        out = self.unit(char)
        if out is not None:
            return out

        keyword = self.keyword_char(char, False)
        if keyword is not None:
            out = self.func(keyword)
            if out is not None:
                return out

            self.whitespace()

            if keyword == 'null':
                return NullValue()
            if keyword in ('true', 'false'):
                return BooleanValue(value=keyword == 'true')
            return KeywordValue(name=keyword)

        return None

    def paren_value(self) -> Optional[Any]:
        s = self.count
        in_parens = self.in_parens

        if self.match_char('('):
            if self.match_char(')'):
                return ListValue(delimiter='', items=[])

            self.in_parens = True

            exp = self.expression()
            if exp is not None and self.match_char(')'):
                self.in_parens = in_parens
                return exp

        self.in_parens = in_parens
        self.seek(s)
        return None

    # -------------------------------------------------------------------------
    # Literals
    # -------------------------------------------------------------------------

    def unit(self, char: Optional[str]) -> Optional[NumberValue]:
        """Number with optional unit. char is the lookahead used for a fast reject."""
        if char not in DIGITS and char != '.':
            return None

        m = self.match(NUMBER_PATTERN)
        if m:
            return NumberValue(value=_to_number(m.group(1)), unit=m.group(3) or '')
        return None

    def color(self) -> Optional[ColorValue]:
        m = self.match(COLOR_PATTERN)
        if not m:
            return None

        if m.group(3):
            r, g, b = (int(d, 16) * 0x11 for d in m.group(3))
        else:
            num = int(m.group(2), 16)
            r, g, b = (num >> 16) & 0xff, (num >> 8) & 0xff, num & 0xff

        return ColorValue(red=r, green=g, blue=b)

    def string(self) -> Optional[StringValue]:
        """Quoted string; interpolations inside are parsed recursively."""
        s = self.count

        if self.match_char('"', False):
            delim = '"'
        elif self.match_char("'", False):
            delim = "'"
        else:
            return None

        content = []
        old_white = self.eat_white_default
        self.eat_white_default = False
        has_interpolation = False

        while True:
            found = self.match_string(delim)
            if found is None:
                break
            text, token = found

            if text != '':
                content.append(text)

            if token == '#{':
                self.count -= len(token)
                inter = self.interpolation(False)
                if inter is not None:
                    content.append(inter)
                    has_interpolation = True
                else:
                    self.count += len(token)
                    content.append('#{')
            elif token == '\\':
                if self.match_char('"', False):
                    content.append('\\"')
                elif self.match_char("'", False):
                    content.append("\\'")
                else:
                    content.append('\\')
            else:
                self.count -= len(delim)
                break

        self.eat_white_default = old_white

        if self.match_char(delim):
            if has_interpolation:
                delim = '"'
                content = [
                    "'" if part == "\\'" else '"' if part == '\\"' else part
                    for part in content
                ]
            return StringValue(quote=delim, parts=content)

        self.seek(s)
        return None

    def progid(self) -> Optional[StringValue]:
        """Legacy IE `progid:DXImageTransform...(args)` syntax."""
        s = self.count

        if self.literal('progid:', False):
            fn = self.open_string('(')
            if fn is not None and self.match_char('('):
                args = self.open_string(')', '(')

                if self.match_char(')'):
                    parts = ['progid:', fn, '(']
                    if args is not None:
                        parts.append(args)
                    parts.append(')')
                    return StringValue(quote='', parts=parts)

        self.seek(s)
        return None

    def url(self) -> Optional[StringValue]:
        m = self.match(URL_PATTERN)
        if m:
            quote = m.group(2)
            return StringValue(quote='', parts=[f"url({quote}{m.group(3)}{quote})"])
        return None

    def mixed_keyword(self) -> Optional[List[Any]]:
        """Run of keywords and interpolations with no whitespace between them."""
        parts = []

        old_white = self.eat_white_default
        self.eat_white_default = False

        while True:
            key = self.keyword_char(self._current())
            if key is not None:
                parts.append(key)
                continue

            inter = self.interpolation()
            if inter is not None:
                parts.append(inter)
                continue

            break

        self.eat_white_default = old_white

        if not parts:
            return None

        if self.eat_white_default:
            self.whitespace()

        return parts

    def open_string(self, end: str, nesting_open: Optional[str] = None) -> Optional[StringValue]:
        """
        Raw text up to an unnested `end`, keeping quoted strings,
        interpolations and block comments as units. The cursor is left on
        `end`. nesting_open counts opening characters so `(` ... `)` pairs
        inside the text do not terminate it early.
        """
        old_white = self.eat_white_default
        self.eat_white_default = False

        pattern = compile_pattern(
            r'(.*?)([\'"]|#\{|' + re.escape(end) + r'|/\*.*?\*/)', self.flags
        )

        nesting_level = 0
        content = []

        while True:
            m = self.match(pattern, False)
            if m is None:
                break

            if m.group(1):
                content.append(m.group(1))
                if nesting_open:
                    nesting_level += m.group(1).count(nesting_open)

            tok = m.group(2)
            self.count -= len(tok)

            if tok == end:
                if nesting_level == 0:
                    break
                nesting_level -= 1

            if tok in ("'", '"'):
                string = self.string()
                if string is not None:
                    content.append(string)
                    continue

            if tok == '#{':
                inter = self.interpolation()
                if inter is not None:
                    content.append(inter)
                    continue

            content.append(tok)
            self.count += len(tok)

        self.eat_white_default = old_white

        if not content:
            return None

        # trim the end
        if isinstance(content[-1], str):
            content[-1] = content[-1].rstrip()

        return StringValue(quote='', parts=content)

    def interpolation(self, look_white: bool = True) -> Optional[Interpolation]:
        """`#{ value_list }`; look_white records the whitespace around it."""
        old_white = self.eat_white_default
        self.eat_white_default = True

        s = self.count

        if self.literal('#{'):
            value = self.value_list()
            if value is not None and self.match_char('}', False):
                if look_white:
                    before = self._char_at(s - 1)
                    after = self._current()
                    left = before is not None and before.isspace()
                    right = after is not None and after.isspace()
                else:
                    left = right = False

                out = Interpolation(value=value, space_before=left, space_after=right)
                self.eat_white_default = old_white

                if self.eat_white_default:
                    self.whitespace()

                return out

        self.seek(s)
        self.eat_white_default = old_white
        return None

    # -------------------------------------------------------------------------
    # Maps, functions and arguments
    # -------------------------------------------------------------------------

    def map(self) -> Optional[MapValue]:
        """`(key: value, ...)`; at least one pair, trailing comma allowed."""
        s = self.count

        if not self.match_char('('):
            return None

        keys = []
        values = []

        while True:
            ss = self.count
            key = self.generic_list(self.expression)
            if key is None:
                break
            if not self.match_char(':'):
                self.seek(ss)
                break
            value = self.generic_list(self.expression)
            if value is None:
                self.seek(ss)
                break

            keys.append(key)
            values.append(value)

            if not self.match_char(','):
                break

        if not keys or not self.match_char(')'):
            self.seek(s)
            return None

        return MapValue(keys=keys, values=values)

    def func(self, name: str) -> Optional[FunctionCall]:
        """Function call arguments following an already matched name."""
        s = self.count

        if self.match_char('('):
            if name == 'alpha':
                args = self.argument_list()
                if args is not None:
                    return FunctionCall(
                        name=name,
                        args=[Argument(value=StringValue(quote='', parts=args))],
                        raw=True,
                    )

            if name != 'expression' and not CALC_RE.match(name):
                ss = self.count

                args = self.arg_values()
                if args is not None and self.match_char(')'):
                    return FunctionCall(name=name, args=args)

                self.seek(ss)

            raw = self.open_string(')', '(')
            if self.match_char(')'):
                args = []
                if raw is not None:
                    args.append(Argument(value=raw))
                return FunctionCall(name=name, args=args, raw=raw is not None)

        self.seek(s)
        return None

    def argument_list(self) -> Optional[List[Any]]:
        """`name=value, ...` arguments of the IE alpha() filter, kept as string parts."""
        s = self.count
        self.match_char('(')

        args = []

        while True:
            var = self.keyword()
            if var is None:
                break

            if self.match_char('='):
                exp = self.expression()
            else:
                exp = None
            if exp is None:
                break

            args.append(StringValue(quote='', parts=[var + '=']))
            args.append(exp)

            if not self.match_char(','):
                break

            args.append(StringValue(quote='', parts=[', ']))

        if not self.match_char(')') or not args:
            self.seek(s)
            return None

        return args

    def arg_values(self) -> Optional[List[Argument]]:
        out = self.generic_list(self.arg_value, ',', False)
        if out is not None:
            return out.items
        return None

    def arg_value(self) -> Optional[Argument]:
        """`[$name:] value[...]`"""
        s = self.count

        name = None
        var = self.variable()
        if var is not None and self.match_char(':'):
            name = var.name
        else:
            self.seek(s)

        value = self.generic_list(self.expression)
        if value is None:
            self.seek(s)
            return None

        arg = Argument(name=name, value=value)
        if self.literal('...'):
            arg.is_spread = True
        return arg

    def argument_def(self) -> Optional[List[ParameterDef]]:
        """Mixin/function parameter list: `($a, $b: default, $rest...)`."""
        s = self.count
        self.match_char('(')

        args = []

        while True:
            var = self.variable()
            if var is None:
                break

            param = ParameterDef(name=var.name)

            ss = self.count
            if self.match_char(':'):
                default = self.generic_list(self.expression)
                if default is not None:
                    param.default = default
                else:
                    self.seek(ss)

            if self.literal('...'):
                sss = self.count
                if not self.match_char(')'):
                    self.throw_parse_error('... has to be after the final argument')
                param.is_spread = True
                self.seek(sss)

            args.append(param)

            if not self.match_char(','):
                break

        if not self.match_char(')'):
            self.seek(s)
            return None

        return args
