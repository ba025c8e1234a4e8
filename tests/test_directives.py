"""
Tests for @-directives.
"""

import pytest

from scssparse.parser import ParseError, parse_source
from scssparse.parser.nodes import (
    AtRootBlock,
    BinaryOperation,
    Break,
    Continue,
    Debug,
    DirectiveBlock,
    EachBlock,
    ElseBlock,
    ElseIfBlock,
    Error,
    Extend,
    ForBlock,
    FunctionBlock,
    FunctionCall,
    IfBlock,
    Import,
    ImportOnce,
    Include,
    IncludeBlock,
    Interpolation,
    KeywordValue,
    ListValue,
    MapValue,
    MediaBlock,
    MediaExpression,
    MediaType,
    MixinBlock,
    MixinContent,
    NullValue,
    NumberValue,
    Placeholder,
    Return,
    StringValue,
    VariableRef,
    Warn,
    WhileBlock,
)

from conftest import get_property, selector_texts


def only_child(source: str):
    root = parse_source(source)
    assert len(root.children) == 1
    return root.children[0]


class TestImports:
    """Test @import and friends."""

    def test_import_string(self):
        node = only_child('@import "base/reset";')
        assert isinstance(node, Import)
        assert node.path == StringValue(quote='"', parts=["base/reset"])

    def test_import_list(self):
        node = only_child('@import "a", "b";')
        assert isinstance(node.path, ListValue)
        assert node.path.delimiter == ","

    def test_import_url(self):
        node = only_child("@import url(theme.css);")
        assert isinstance(node.path, FunctionCall)
        assert node.path.name == "url"

    def test_import_once(self):
        node = only_child('@scssphp-import-once "x";')
        assert isinstance(node, ImportOnce)


class TestExtend:
    """Test @extend."""

    def test_extend(self):
        block = only_child("a { @extend .btn; }")
        (extend,) = block.children
        assert isinstance(extend, Extend)
        assert [str(s) for s in extend.selectors] == [".btn"]
        assert not extend.optional

    def test_optional(self):
        block = only_child("a { @extend %ph !optional; }")
        (extend,) = block.children
        assert extend.optional
        (selector,) = extend.selectors
        assert selector.parts[0].fragments == [Placeholder(name="ph")]
        assert len(selector.parts) == 1


class TestMixins:
    """Test @mixin, @include and @content."""

    def test_mixin_with_parameters(self):
        mixin = only_child("@mixin box($w, $h: 2px, $rest...) { width: $w; }")
        assert isinstance(mixin, MixinBlock)
        assert mixin.name == "box"
        assert [p.name for p in mixin.args] == ["w", "h", "rest"]
        assert mixin.args[1].default == NumberValue(value=2, unit="px")
        assert mixin.args[2].is_spread
        assert get_property(mixin, "width") == VariableRef(name="w")

    def test_mixin_without_parameters(self):
        mixin = only_child("@mixin clearfix { @content; }")
        assert mixin.args is None
        assert isinstance(mixin.children[0], MixinContent)

    def test_spread_must_be_last(self):
        with pytest.raises(ParseError) as exc_info:
            parse_source("@mixin m($a..., $b) { }")
        assert exc_info.value.message == "... has to be after the final argument"

    def test_include(self):
        block = only_child("a { @include shadow; }")
        (include,) = block.children
        assert include == Include(
            name="shadow", line=1, column=4, offset=4,
        )

    def test_include_with_arguments(self):
        block = only_child("a { @include pad(1px, $side: left); }")
        (include,) = block.children
        assert [a.name for a in include.args] == [None, "side"]
        assert include.args[1].value == KeywordValue(name="left")

    def test_include_empty_parens(self):
        block = only_child("a { @include reset(); }")
        assert block.children[0].args is None

    def test_include_with_content_block(self):
        block = only_child("a {\n  @include bp(md) {\n    color: red;\n  }\n}")
        (include,) = block.children
        assert isinstance(include, Include)
        assert include.name == "bp"
        assert (include.line, include.column) == (2, 2)
        content = include.content
        assert isinstance(content, IncludeBlock)
        assert content.include is None
        assert get_property(content, "color") == KeywordValue(name="red")


class TestFunctions:
    """Test @function and its statements."""

    def test_function(self):
        func = only_child("@function double($x) { @return $x * 2; }")
        assert isinstance(func, FunctionBlock)
        assert func.name == "double"
        (ret,) = func.children
        assert isinstance(ret, Return)
        assert isinstance(ret.value, BinaryOperation)

    def test_bare_return(self):
        func = only_child("@function f() { @return; }")
        assert func.args == []
        assert func.children[0].value == NullValue()

    @pytest.mark.parametrize("directive,cls", [
        ("@debug", Debug),
        ("@warn", Warn),
        ("@error", Error),
    ])
    def test_messages(self, directive, cls):
        node = only_child(f'{directive} "value: #{{$v}}";')
        assert isinstance(node, cls)
        assert node.value.has_interpolation


class TestControlFlow:
    """Test @if, @each, @for and @while."""

    def test_if_else_chain(self):
        source = "@if $a { x: 1; } @else if $b { x: 2; } @elseif $c { x: 3; } @else { x: 4; }"
        block = only_child(source)
        assert isinstance(block, IfBlock)
        assert block.cond == VariableRef(name="a")
        kinds = [type(c) for c in block.cases]
        assert kinds == [ElseIfBlock, ElseIfBlock, ElseBlock]
        assert block.cases[0].cond == VariableRef(name="b")
        assert block.cases[1].cond == VariableRef(name="c")
        assert get_property(block.cases[2], "x") == NumberValue(value=4)

    def test_else_without_if(self):
        block = only_child("@else { x: 1; }")
        assert isinstance(block, DirectiveBlock)
        assert block.name == "else"

    def test_else_after_comment(self):
        root = parse_source("@if $a { } /* note */ @else { }")
        block = root.children[0]
        assert isinstance(block, IfBlock)
        assert len(block.cases) == 1

    def test_each(self):
        block = only_child("@each $key, $value in $map { a: b; }")
        assert isinstance(block, EachBlock)
        assert block.vars == ["key", "value"]
        assert block.list == VariableRef(name="map")

    def test_each_over_list(self):
        block = only_child("@each $name in a, b, c { }")
        assert block.vars == ["name"]
        assert len(block.list.items) == 3

    def test_for_through(self):
        block = only_child("@for $i from 1 through 3 { }")
        assert isinstance(block, ForBlock)
        assert block.var == "i"
        assert block.start == NumberValue(value=1)
        assert block.end == NumberValue(value=3)
        assert not block.until

    def test_for_to(self):
        block = only_child("@for $i from 1 to $n { }")
        assert block.until
        assert block.end == VariableRef(name="n")

    def test_while_with_break_and_continue(self):
        block = only_child("@while $i > 0 { @break; @continue; }")
        assert isinstance(block, WhileBlock)
        assert block.cond.op == ">"
        assert [type(c) for c in block.children] == [Break, Continue]


class TestMedia:
    """Test @media queries."""

    def test_type_and_expression(self):
        block = only_child("@media screen and (max-width: 100px) { a { b: c; } }")
        assert isinstance(block, MediaBlock)
        ((media_type, expression),) = block.query_list
        assert isinstance(media_type, MediaType)
        assert media_type.modifiers == []
        assert media_type.types.items == [KeywordValue(name="screen")]
        assert isinstance(expression, MediaExpression)
        assert expression.feature == KeywordValue(name="max-width")
        assert expression.value == NumberValue(value=100, unit="px")
        assert selector_texts(block.children[0]) == ["a"]

    def test_modifier(self):
        block = only_child("@media only screen { }")
        media_type = block.query_list[0][0]
        assert media_type.modifiers == ["only"]

    def test_expression_only(self):
        block = only_child("@media (min-width: 10px) and (orientation: landscape) { }")
        (query,) = block.query_list
        assert len(query) == 2
        assert all(isinstance(q, MediaExpression) for q in query)

    def test_query_list(self):
        block = only_child("@media print, screen { }")
        assert len(block.query_list) == 2

    def test_interpolated_type(self):
        block = only_child("@media #{$query} { }")
        media_type = block.query_list[0][0]
        assert isinstance(media_type.types.items[0], Interpolation)


class TestOtherDirectives:
    """Test @at-root and directives without a dedicated rule."""

    def test_at_root_selector(self):
        block = only_child(".a { @at-root .b { c: d; } }")
        (at_root,) = block.children
        assert isinstance(at_root, AtRootBlock)
        assert [str(s) for s in at_root.selector] == [".b"]
        assert at_root.with_ is None

    def test_at_root_with_query(self):
        block = only_child("@at-root (without: media) { }")
        assert block.selector is None
        assert isinstance(block.with_, MapValue)

    def test_font_face(self):
        block = only_child("@font-face { font-family: x; }")
        assert isinstance(block, DirectiveBlock)
        assert block.name == "font-face"
        assert block.value is None

    def test_keyframes(self):
        block = only_child("@keyframes spin { from { a: b; } 50% { a: c; } }")
        assert block.name == "keyframes"
        assert str(block.value) == "spin"
        assert [selector_texts(b) for b in block.get_blocks()] == [["from"], ["50%"]]

    def test_vendor_keyframes(self):
        block = only_child("@-webkit-keyframes pulse { }")
        assert block.name == "-webkit-keyframes"

    def test_supports(self):
        block = only_child("@supports (display: grid) { a { b: c; } }")
        assert block.name == "supports"
        assert str(block.value) == "(display: grid)"

    def test_unknown_statement_directive(self):
        with pytest.raises(ParseError):
            parse_source("@foo bar;")
