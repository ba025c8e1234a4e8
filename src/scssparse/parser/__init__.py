"""
scssparse.parser - SCSS Parser

Scanner, expression, selector and statement grammars.
Converts stylesheet text into a tree of Block and statement nodes.
"""

from scssparse.parser.positions import SourcePositionIndex
from scssparse.parser.scanner import ParseError, Scanner
from scssparse.parser.tree import BlockTree
from scssparse.parser.parser import (
    Parser,
    parse_document,
    parse_file,
    parse_selector_list,
    parse_source,
    parse_value,
)
from scssparse.parser.nodes import (
    ASTNode,
    NodeType,
    BlockKind,
    Block,
    Selector,
    ListValue,
    MapValue,
)

__all__ = [
    # Positions / scanning
    "SourcePositionIndex",
    "Scanner",
    "ParseError",
    "BlockTree",
    # Parser
    "Parser",
    "parse_document",
    "parse_file",
    "parse_selector_list",
    "parse_source",
    "parse_value",
    # AST Nodes
    "ASTNode",
    "NodeType",
    "BlockKind",
    "Block",
    "Selector",
    "ListValue",
    "MapValue",
]
