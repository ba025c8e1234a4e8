"""
SCSS Syntax Tree Nodes

Tagged-union node types produced by the parser:
- value nodes (lists, numbers, strings, colors, operations, maps, ...)
- selector nodes (selectors, compound selectors and their fragments)
- statements (assignments, @import, @extend, @include, ...)
- blocks (rule blocks and the specialized at-rule blocks)

Every node carries the source position it was recorded at. Value and
selector nodes keep the defaults (0) since only statements and blocks are
position-tagged by the parser.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Union


class NodeType(Enum):
    """Types of syntax tree nodes."""
    # values
    LIST = auto()
    NUMBER = auto()
    STRING = auto()
    COLOR = auto()
    BOOLEAN = auto()
    NULL = auto()
    KEYWORD = auto()
    VARIABLE = auto()
    ARGUMENT = auto()
    FUNCTION_CALL = auto()
    UNARY = auto()
    BINARY = auto()
    MAP = auto()
    INTERPOLATION = auto()
    MEDIA_TYPE = auto()
    MEDIA_EXPRESSION = auto()
    PARAMETER = auto()
    # selectors
    SELECTOR = auto()
    COMPOUND_SELECTOR = auto()
    COMBINATOR = auto()
    ELEMENT = auto()
    SELF = auto()
    CLASS = auto()
    ID = auto()
    PLACEHOLDER = auto()
    PSEUDO = auto()
    ATTRIBUTE = auto()
    RAW = auto()
    # statements
    VARIABLE_ASSIGNMENT = auto()
    PROPERTY_ASSIGNMENT = auto()
    IMPORT = auto()
    IMPORT_ONCE = auto()
    EXTEND = auto()
    INCLUDE = auto()
    RETURN = auto()
    BREAK = auto()
    CONTINUE = auto()
    DEBUG = auto()
    WARN = auto()
    ERROR = auto()
    MIXIN_CONTENT = auto()
    CHARSET = auto()
    COMMENT = auto()
    # blocks
    BLOCK = auto()


class BlockKind(Enum):
    """Kinds of blocks; the tag a closed block is appended with."""
    BLOCK = "block"
    MEDIA = "media"
    MIXIN = "mixin"
    FUNCTION = "function"
    IF = "if"
    ELSE = "else"
    ELSEIF = "elseif"
    EACH = "each"
    FOR = "for"
    WHILE = "while"
    INCLUDE = "include"
    AT_ROOT = "at-root"
    NESTED_PROPERTY = "nested-property"
    DIRECTIVE = "directive"


def _dump(value: Any) -> Any:
    """Recursively convert nodes (and lists of nodes) to plain data."""
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_dump(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass
class ASTNode:
    """Base class for syntax tree nodes."""
    node_type: NodeType = None  # Set by subclasses in __post_init__
    line: int = 0
    column: int = 0
    offset: int = 0
    source_index: int = 0

    def _position(self) -> Dict[str, int]:
        return {'line': self.line, 'column': self.column, 'source_index': self.source_index}

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': self.node_type.name.lower()}


# =============================================================================
# VALUES
# =============================================================================

@dataclass
class ListValue(ASTNode):
    """A comma (',') or whitespace ('') separated list; 'and' inside media queries."""
    delimiter: str = ""
    items: List[Any] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.LIST

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'list', 'delimiter': self.delimiter, 'items': _dump(self.items)}


@dataclass
class NumberValue(ASTNode):
    """A number with an optional unit (px, em, %, ...)."""
    value: Union[int, float] = 0
    unit: str = ""

    def __post_init__(self):
        self.node_type = NodeType.NUMBER

    def __str__(self):
        return f"{self.value}{self.unit}"

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'number', 'value': self.value, 'unit': self.unit}


@dataclass
class StringValue(ASTNode):
    """
    A string made of literal text runs and embedded nodes.

    quote is '"' or "'" for quoted strings and '' for raw text captured
    verbatim (property names, directive values, raw function arguments).
    """
    quote: str = ""
    parts: List[Any] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.STRING

    @property
    def has_interpolation(self) -> bool:
        return any(isinstance(p, Interpolation) for p in self.parts)

    def __str__(self):
        return "".join(str(p) for p in self.parts)

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'string', 'quote': self.quote, 'parts': _dump(self.parts)}


@dataclass
class ColorValue(ASTNode):
    """An RGB color from a #rgb / #rrggbb literal."""
    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: float = 1

    def __post_init__(self):
        self.node_type = NodeType.COLOR

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'color',
            'red': self.red,
            'green': self.green,
            'blue': self.blue,
            'alpha': self.alpha,
        }


@dataclass
class BooleanValue(ASTNode):
    value: bool = False

    def __post_init__(self):
        self.node_type = NodeType.BOOLEAN

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'boolean', 'value': self.value}


@dataclass
class NullValue(ASTNode):
    def __post_init__(self):
        self.node_type = NodeType.NULL


@dataclass
class KeywordValue(ASTNode):
    """A bare identifier such as `bold`, `solid` or `!default`."""
    name: str = ""

    def __post_init__(self):
        self.node_type = NodeType.KEYWORD

    def __str__(self):
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'keyword', 'name': self.name}


@dataclass
class VariableRef(ASTNode):
    """A `$name` reference (name stored without the sigil)."""
    name: str = ""

    def __post_init__(self):
        self.node_type = NodeType.VARIABLE

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'variable', 'name': self.name}


@dataclass
class Argument(ASTNode):
    """One call argument: `value`, `$name: value` or `value...`."""
    name: Optional[str] = None
    value: Any = None
    is_spread: bool = False

    def __post_init__(self):
        self.node_type = NodeType.ARGUMENT

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'argument',
            'name': self.name,
            'value': _dump(self.value),
            'is_spread': self.is_spread,
        }


@dataclass
class FunctionCall(ASTNode):
    """
    A function call. raw is True when the argument text was kept verbatim
    (alpha(opacity=..), calc(), expression(), or unparseable arguments).
    """
    name: str = ""
    args: List[Argument] = field(default_factory=list)
    raw: bool = False

    def __post_init__(self):
        self.node_type = NodeType.FUNCTION_CALL

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'function_call', 'name': self.name, 'args': _dump(self.args), 'raw': self.raw}


@dataclass
class UnaryOperation(ASTNode):
    op: str = ""
    operand: Any = None
    in_parens: bool = False

    def __post_init__(self):
        self.node_type = NodeType.UNARY

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'unary', 'op': self.op, 'operand': _dump(self.operand), 'in_parens': self.in_parens}


@dataclass
class BinaryOperation(ASTNode):
    """
    A binary operation. white_before/white_after record whether the operator
    had whitespace around it; the evaluator uses them to tell `a-b` (string)
    from `a - b` (arithmetic).
    """
    op: str = ""
    left: Any = None
    right: Any = None
    in_parens: bool = False
    white_before: bool = False
    white_after: bool = False

    def __post_init__(self):
        self.node_type = NodeType.BINARY

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'binary',
            'op': self.op,
            'left': _dump(self.left),
            'right': _dump(self.right),
            'in_parens': self.in_parens,
            'white_before': self.white_before,
            'white_after': self.white_after,
        }


@dataclass
class MapValue(ASTNode):
    """A `(key: value, ...)` map with keys and values in source order."""
    keys: List[Any] = field(default_factory=list)
    values: List[Any] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.MAP

    def items(self):
        return list(zip(self.keys, self.values))

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'map', 'keys': _dump(self.keys), 'values': _dump(self.values)}


@dataclass
class Interpolation(ASTNode):
    """A `#{...}` fragment; space_* record surrounding whitespace when tracked."""
    value: Any = None
    space_before: bool = False
    space_after: bool = False

    def __post_init__(self):
        self.node_type = NodeType.INTERPOLATION

    def __str__(self):
        return "#{...}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'interpolation',
            'value': _dump(self.value),
            'space_before': self.space_before,
            'space_after': self.space_after,
        }


@dataclass
class MediaType(ASTNode):
    """`[only|not] screen` part of a media query."""
    modifiers: List[str] = field(default_factory=list)
    types: ListValue = None

    def __post_init__(self):
        self.node_type = NodeType.MEDIA_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'media_type', 'modifiers': list(self.modifiers), 'types': _dump(self.types)}


@dataclass
class MediaExpression(ASTNode):
    """`(feature[: value])` part of a media query."""
    feature: Any = None
    value: Any = None

    def __post_init__(self):
        self.node_type = NodeType.MEDIA_EXPRESSION

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'media_expression', 'feature': _dump(self.feature), 'value': _dump(self.value)}


@dataclass
class ParameterDef(ASTNode):
    """A mixin/function parameter: `$name[: default][...]`."""
    name: str = ""
    default: Any = None
    is_spread: bool = False

    def __post_init__(self):
        self.node_type = NodeType.PARAMETER

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'parameter',
            'name': self.name,
            'default': _dump(self.default),
            'is_spread': self.is_spread,
        }


# =============================================================================
# SELECTORS
# =============================================================================

def _render(parts) -> str:
    return "".join(str(p) for p in parts)


@dataclass
class ElementName(ASTNode):
    """Type selector, `*`, or any other bare word inside a compound selector."""
    name: str = ""

    def __post_init__(self):
        self.node_type = NodeType.ELEMENT

    def __str__(self):
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'element', 'name': self.name}


@dataclass
class SelfReference(ASTNode):
    """The parent reference `&`."""
    def __post_init__(self):
        self.node_type = NodeType.SELF

    def __str__(self):
        return "&"


@dataclass
class ClassName(ASTNode):
    name: str = ""

    def __post_init__(self):
        self.node_type = NodeType.CLASS

    def __str__(self):
        return f".{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'class', 'name': self.name}


@dataclass
class IdName(ASTNode):
    name: str = ""

    def __post_init__(self):
        self.node_type = NodeType.ID

    def __str__(self):
        return f"#{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'id', 'name': self.name}


@dataclass
class Placeholder(ASTNode):
    """A `%name` placeholder selector."""
    name: str = ""

    def __post_init__(self):
        self.node_type = NodeType.PLACEHOLDER

    def __str__(self):
        return f"%{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'placeholder', 'name': self.name}


@dataclass
class PseudoSelector(ASTNode):
    """`:name` / `::name` with an optional raw `(argument)`."""
    prefix: str = ":"
    name: List[Any] = field(default_factory=list)
    argument: Optional[StringValue] = None
    has_parens: bool = False

    def __post_init__(self):
        self.node_type = NodeType.PSEUDO

    def __str__(self):
        text = self.prefix + _render(self.name)
        if self.has_parens:
            text += f"({self.argument if self.argument is not None else ''})"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'pseudo',
            'prefix': self.prefix,
            'name': _dump(self.name),
            'argument': _dump(self.argument),
            'has_parens': self.has_parens,
        }


@dataclass
class AttributeSelector(ASTNode):
    """`[...]` with its content captured verbatim."""
    content: Optional[StringValue] = None

    def __post_init__(self):
        self.node_type = NodeType.ATTRIBUTE

    def __str__(self):
        return f"[{self.content if self.content is not None else ''}]"

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'attribute', 'content': _dump(self.content)}


@dataclass
class RawFragment(ASTNode):
    """Punctuation kept as-is: a lone `.` or `#`, `|`, or an escaped character."""
    text: str = ""

    def __post_init__(self):
        self.node_type = NodeType.RAW

    def __str__(self):
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'raw', 'text': self.text}


@dataclass
class CompoundSelector(ASTNode):
    """Fragments written without whitespace between them, e.g. `a.b#c:hover`."""
    fragments: List[Any] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.COMPOUND_SELECTOR

    def __str__(self):
        return _render(self.fragments)

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'compound_selector', 'fragments': _dump(self.fragments)}


@dataclass
class Combinator(ASTNode):
    """`>`, `>>`, `+`, `~` or a `/name/` combinator."""
    token: str = ""

    def __post_init__(self):
        self.node_type = NodeType.COMBINATOR

    def __str__(self):
        return self.token

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'combinator', 'token': self.token}


@dataclass
class Selector(ASTNode):
    """Whitespace separated sequence of compound selectors and combinators."""
    parts: List[Union[CompoundSelector, Combinator]] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.SELECTOR

    def __str__(self):
        return " ".join(str(p) for p in self.parts)

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'selector', 'parts': _dump(self.parts)}


SelectorList = List[Selector]


# =============================================================================
# STATEMENTS
# =============================================================================

@dataclass
class VariableAssignment(ASTNode):
    """`$name: value [!default|!global];`"""
    name: str = ""
    value: Any = None
    flag: Optional[str] = None

    def __post_init__(self):
        self.node_type = NodeType.VARIABLE_ASSIGNMENT

    def __repr__(self):
        return f"VariableAssignment(${self.name}: {self.value!r}{' ' + self.flag if self.flag else ''})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'variable_assignment',
            'name': self.name,
            'value': _dump(self.value),
            'flag': self.flag,
            **self._position(),
        }


@dataclass
class PropertyAssignment(ASTNode):
    """`name: value;` where name is a plain identifier or a StringValue of name parts."""
    name: Union[str, StringValue] = ""
    value: Any = None

    def __post_init__(self):
        self.node_type = NodeType.PROPERTY_ASSIGNMENT

    @property
    def name_text(self) -> str:
        return str(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'property_assignment',
            'name': _dump(self.name),
            'value': _dump(self.value),
            **self._position(),
        }


@dataclass
class Import(ASTNode):
    path: Any = None

    def __post_init__(self):
        self.node_type = NodeType.IMPORT

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'import', 'path': _dump(self.path), **self._position()}


@dataclass
class ImportOnce(ASTNode):
    path: Any = None

    def __post_init__(self):
        self.node_type = NodeType.IMPORT_ONCE

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'import_once', 'path': _dump(self.path), **self._position()}


@dataclass
class Extend(ASTNode):
    selectors: List[Selector] = field(default_factory=list)
    optional: bool = False

    def __post_init__(self):
        self.node_type = NodeType.EXTEND

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'extend', 'selectors': _dump(self.selectors), 'optional': self.optional, **self._position()}


@dataclass
class Include(ASTNode):
    """`@include name(args);` or, with a body, `@include name(args) { ... }`."""
    name: str = ""
    args: Optional[List[Argument]] = None
    content: Optional['Block'] = None

    def __post_init__(self):
        self.node_type = NodeType.INCLUDE

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'include',
            'name': self.name,
            'args': _dump(self.args),
            'content': _dump(self.content),
            **self._position(),
        }


@dataclass
class Return(ASTNode):
    value: Any = None

    def __post_init__(self):
        self.node_type = NodeType.RETURN

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'return', 'value': _dump(self.value), **self._position()}


@dataclass
class Break(ASTNode):
    def __post_init__(self):
        self.node_type = NodeType.BREAK

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'break', **self._position()}


@dataclass
class Continue(ASTNode):
    def __post_init__(self):
        self.node_type = NodeType.CONTINUE

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'continue', **self._position()}


@dataclass
class Debug(ASTNode):
    value: Any = None

    def __post_init__(self):
        self.node_type = NodeType.DEBUG

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'debug', 'value': _dump(self.value), **self._position()}


@dataclass
class Warn(ASTNode):
    value: Any = None

    def __post_init__(self):
        self.node_type = NodeType.WARN

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'warn', 'value': _dump(self.value), **self._position()}


@dataclass
class Error(ASTNode):
    """The `@error` directive (not an exception)."""
    value: Any = None

    def __post_init__(self):
        self.node_type = NodeType.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'error', 'value': _dump(self.value), **self._position()}


@dataclass
class MixinContent(ASTNode):
    """`@content;`"""
    def __post_init__(self):
        self.node_type = NodeType.MIXIN_CONTENT

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'mixin_content', **self._position()}


@dataclass
class Charset(ASTNode):
    value: Any = None

    def __post_init__(self):
        self.node_type = NodeType.CHARSET

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'charset', 'value': _dump(self.value), **self._position()}


@dataclass
class Comment(ASTNode):
    """A `/* */` comment kept in the tree."""
    text: str = ""

    def __post_init__(self):
        self.node_type = NodeType.COMMENT

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': 'comment', 'text': self.text, **self._position()}


Statement = Union[
    VariableAssignment, PropertyAssignment, Import, ImportOnce, Extend, Include,
    Return, Break, Continue, Debug, Warn, Error, MixinContent, Charset, Comment,
]


# =============================================================================
# BLOCKS
# =============================================================================

@dataclass
class Block(ASTNode):
    """
    A scope-bearing node: the root, a rule block, or a specialized at-rule block.

    parent is the arena index of the enclosing block while this block is
    open; it is reset to None once the block is closed.
    """
    selectors: Optional[List[Selector]] = None
    children: List[Any] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
    parent: Optional[int] = None
    kind: BlockKind = BlockKind.BLOCK
    is_root: bool = False
    dont_append: bool = False

    def __post_init__(self):
        self.node_type = NodeType.BLOCK

    def __repr__(self):
        name = "Root" if self.is_root else type(self).__name__
        return f"{name}({self.kind.value}, {len(self.children)} children)"

    def get_blocks(self) -> List['Block']:
        """Child blocks in source order."""
        return [c for c in self.children if isinstance(c, Block)]

    def get_statements(self, cls=None) -> List[Any]:
        """Non-block children, optionally filtered by node class."""
        stmts = [c for c in self.children if not isinstance(c, Block)]
        if cls is not None:
            stmts = [s for s in stmts if isinstance(s, cls)]
        return stmts

    def _payload(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        data = {
            '_type': 'root' if self.is_root else 'block',
            'kind': self.kind.value,
            'selectors': _dump(self.selectors),
            **self._payload(),
            **self._position(),
            'children': _dump(self.children),
        }
        return data


@dataclass
class MediaBlock(Block):
    query_list: List[List[Any]] = field(default_factory=list)
    value: Optional[Any] = None

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.MEDIA

    def _payload(self) -> Dict[str, Any]:
        return {'query_list': _dump(self.query_list), 'value': _dump(self.value)}


@dataclass
class MixinBlock(Block):
    name: str = ""
    args: Optional[List[ParameterDef]] = None

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.MIXIN

    def _payload(self) -> Dict[str, Any]:
        return {'name': self.name, 'args': _dump(self.args)}


@dataclass
class FunctionBlock(Block):
    name: str = ""
    args: List[ParameterDef] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.FUNCTION

    def _payload(self) -> Dict[str, Any]:
        return {'name': self.name, 'args': _dump(self.args)}


@dataclass
class IfBlock(Block):
    """`@if cond { }`; the following @else/@elseif blocks are collected in cases."""
    cond: Any = None
    cases: List[Block] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.IF

    def _payload(self) -> Dict[str, Any]:
        return {'cond': _dump(self.cond), 'cases': _dump(self.cases)}


@dataclass
class ElseBlock(Block):
    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.ELSE
        self.dont_append = True


@dataclass
class ElseIfBlock(Block):
    cond: Any = None

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.ELSEIF
        self.dont_append = True

    def _payload(self) -> Dict[str, Any]:
        return {'cond': _dump(self.cond)}


@dataclass
class EachBlock(Block):
    vars: List[str] = field(default_factory=list)
    list: Any = None

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.EACH

    def _payload(self) -> Dict[str, Any]:
        return {'vars': list(self.vars), 'list': _dump(self.list)}


@dataclass
class ForBlock(Block):
    """`@for $var from start through|to end`; until is True for `to` (exclusive)."""
    var: str = ""
    start: Any = None
    end: Any = None
    until: bool = False

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.FOR

    def _payload(self) -> Dict[str, Any]:
        return {'var': self.var, 'start': _dump(self.start), 'end': _dump(self.end), 'until': self.until}


@dataclass
class WhileBlock(Block):
    cond: Any = None

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.WHILE

    def _payload(self) -> Dict[str, Any]:
        return {'cond': _dump(self.cond)}


@dataclass
class IncludeBlock(Block):
    """Body of an `@include ... { }`; rewrapped into its Include when closed."""
    include: Optional[Include] = None

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.INCLUDE

    def _payload(self) -> Dict[str, Any]:
        return {'name': self.include.name if self.include else None}


@dataclass
class AtRootBlock(Block):
    selector: Optional[List[Selector]] = None
    with_: Optional[MapValue] = None

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.AT_ROOT

    def _payload(self) -> Dict[str, Any]:
        return {'selector': _dump(self.selector), 'with': _dump(self.with_)}


@dataclass
class NestedPropertyBlock(Block):
    """`font: { family: x; }`; prefix is the property name before the colon."""
    prefix: Any = None

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.NESTED_PROPERTY

    def _payload(self) -> Dict[str, Any]:
        return {'prefix': _dump(self.prefix)}


@dataclass
class DirectiveBlock(Block):
    """Any other `@name [value] { }` directive."""
    name: str = ""
    value: Optional[Any] = None

    def __post_init__(self):
        super().__post_init__()
        self.kind = BlockKind.DIRECTIVE

    def _payload(self) -> Dict[str, Any]:
        return {'name': self.name, 'value': _dump(self.value)}
