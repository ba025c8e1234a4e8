"""
AST Serialization - JSON conversion of parse results.

Dependencies are limited to json (stdlib) and the node classes, so a
parse result can be handed to another process without the parser itself.

Usage:
    from scssparse.parser.ast_serde import serialize_ast, deserialize_ast, count_ast_nodes
"""

import json
from typing import Any, Dict, List, Optional, Union

from scssparse.parser.nodes import ASTNode, Block


def ast_to_data(node: Union[ASTNode, List[Any]], filename: Optional[str] = None) -> Any:
    """
    Convert a parse result to plain data.

    Accepts a node (root block, value) or a list of nodes (selector list).
    filename is recorded on a root block.
    """
    if isinstance(node, list):
        return [ast_to_data(n) for n in node]

    data = node.to_dict()
    if filename is not None and isinstance(node, Block) and node.is_root:
        data['filename'] = str(filename)
    return data


def serialize_ast(node: Union[ASTNode, List[Any]], filename: Optional[str] = None,
                  indent: Optional[int] = None) -> bytes:
    """
    Serialize a parse result to JSON bytes.

    Args:
        node: Root block, value node, or selector list
        filename: Recorded on the root block when given
        indent: Pretty-print indentation (compact when None)

    Returns:
        UTF-8 encoded JSON bytes
    """
    data = ast_to_data(node, filename)
    if indent is None:
        return json.dumps(data, separators=(',', ':')).encode('utf-8')
    return json.dumps(data, indent=indent).encode('utf-8')


def deserialize_ast(data: Union[bytes, str]) -> Any:
    """
    Deserialize AST from JSON bytes or string.

    Returns the dict (or list, for selector lists) representation.
    """
    if isinstance(data, bytes):
        return json.loads(data.decode('utf-8'))
    return json.loads(data)


def count_ast_nodes(ast_data: Union[Dict[str, Any], List[Any]]) -> int:
    """
    Count nodes in a serialized AST.

    Every dict carrying a `_type` key counts as one node.
    """
    if isinstance(ast_data, list):
        return sum(count_ast_nodes(item) for item in ast_data)

    if not isinstance(ast_data, dict):
        return 0

    count = 1 if '_type' in ast_data else 0
    for val in ast_data.values():
        if isinstance(val, (dict, list)):
            count += count_ast_nodes(val)
    return count
