"""
Tests for the selector grammar.
"""

import pytest

from scssparse.parser import ParseError, parse_selector_list
from scssparse.parser.nodes import (
    AttributeSelector,
    ClassName,
    Combinator,
    CompoundSelector,
    ElementName,
    IdName,
    Interpolation,
    NumberValue,
    Placeholder,
    PseudoSelector,
    SelfReference,
    StringValue,
)


def fragments(text: str):
    """Fragments of the single compound selector in text."""
    (selector,) = parse_selector_list(text)
    (compound,) = selector.parts
    assert isinstance(compound, CompoundSelector)
    return compound.fragments


class TestSelectorLists:
    """Test comma separated selector lists."""

    def test_list(self):
        selectors = parse_selector_list("a > b, .c")
        assert [str(s) for s in selectors] == ["a > b", ".c"]

    def test_repeated_commas_ignored(self):
        selectors = parse_selector_list("a,, b")
        assert [str(s) for s in selectors] == ["a", "b"]

    def test_nothing_to_parse(self):
        with pytest.raises(ParseError) as exc_info:
            parse_selector_list("{")
        assert exc_info.value.message == "expected a selector"


class TestCombinators:
    """Test combinators between compound selectors."""

    @pytest.mark.parametrize("text,token", [
        ("a > b", ">"),
        ("a + b", "+"),
        ("a ~ b", "~"),
        ("a >> b", ">>"),
        ("a /deep/ b", "/deep/"),
    ])
    def test_combinator(self, text, token):
        (selector,) = parse_selector_list(text)
        assert len(selector.parts) == 3
        assert selector.parts[1] == Combinator(token=token)
        assert str(selector) == text

    def test_descendant(self):
        (selector,) = parse_selector_list("ul li a")
        assert len(selector.parts) == 3
        assert all(isinstance(p, CompoundSelector) for p in selector.parts)

    def test_leading_combinator(self):
        (selector,) = parse_selector_list("> li")
        assert isinstance(selector.parts[0], Combinator)


class TestFragments:
    """Test fragments inside one compound selector."""

    def test_compound(self):
        parts = fragments("a.b#c:hover")
        assert parts[0] == ElementName(name="a")
        assert parts[1] == ClassName(name="b")
        assert parts[2] == IdName(name="c")
        assert isinstance(parts[3], PseudoSelector)
        assert parts[3].name == ["hover"]

    def test_universal(self):
        parts = fragments("*.foo")
        assert parts[0] == ElementName(name="*")
        assert parts[1] == ClassName(name="foo")

    def test_parent_reference(self):
        parts = fragments("&:hover")
        assert isinstance(parts[0], SelfReference)
        assert str(CompoundSelector(fragments=parts)) == "&:hover"

    def test_parent_suffix(self):
        parts = fragments("&-title")
        assert isinstance(parts[0], SelfReference)
        assert parts[1] == ElementName(name="-title")

    def test_placeholder(self):
        assert fragments("%button-base") == [Placeholder(name="button-base")]

    def test_pseudo_element(self):
        (pseudo,) = fragments("::before")
        assert pseudo.prefix == "::"
        assert not pseudo.has_parens

    def test_pseudo_argument(self):
        parts = fragments("li:nth-child(2n+1)")
        pseudo = parts[1]
        assert pseudo.has_parens
        assert str(pseudo.argument) == "2n+1"
        assert str(pseudo) == ":nth-child(2n+1)"

    def test_pseudo_nested_parens(self):
        (pseudo,) = fragments(":not(:nth-child(2))")
        assert str(pseudo.argument) == ":nth-child(2)"

    def test_pseudo_argument_with_comma(self):
        (selector,) = parse_selector_list(":not(.a, .b)")
        assert str(selector) == ":not(.a, .b)"

    def test_attribute(self):
        parts = fragments('input[type="text"]')
        attr = parts[1]
        assert isinstance(attr, AttributeSelector)
        assert attr.content.parts[0] == "type="
        assert attr.content.parts[1] == StringValue(quote='"', parts=["text"])

    def test_keyframe_percentage(self):
        assert fragments("50%") == [NumberValue(value=50, unit="%")]

    def test_interpolated_class(self):
        parts = fragments(".col-#{$i}")
        assert parts[0] == ClassName(name="col-")
        assert isinstance(parts[1], Interpolation)
        assert parts[1].value.name == "i"

    def test_interpolated_pseudo_name(self):
        (pseudo,) = fragments(":#{$state}")
        assert isinstance(pseudo.name[0], Interpolation)
