"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Import scssparse modules
from scssparse import config as config_module
from scssparse.parser.nodes import Block, IfBlock, Include


# =============================================================================
# CONFIG ISOLATION
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep user config files and SCSSPARSE_* variables out of every test."""
    monkeypatch.setattr(config_module, "CONFIG_SEARCH_PATHS", [])
    for env_var in config_module.ENV_MAPPINGS:
        monkeypatch.delenv(env_var, raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def stylesheet(tmp_path):
    """Write a stylesheet to a temp file and return its path."""
    def _write(text: str, name: str = "style.scss", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path
    return _write


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def selector_texts(block: Block) -> list:
    """Rendered selectors of a block."""
    return [str(s) for s in block.selectors or []]


def get_block_by_selector(parent: Block, text: str) -> Block:
    """Find a child block whose selector list renders as text."""
    for child in parent.children:
        if isinstance(child, Block) and ", ".join(selector_texts(child)) == text:
            return child
    return None


def get_property(block: Block, name: str):
    """Get the value of a property assignment within a block."""
    for child in block.get_statements():
        if getattr(child, 'name_text', None) == name:
            return child.value
    return None


def walk(node):
    """Yield every block and statement of a tree, depth first."""
    yield node
    if isinstance(node, Block):
        for child in node.children:
            yield from walk(child)
    if isinstance(node, IfBlock):
        for case in node.cases:
            yield from walk(case)
    if isinstance(node, Include) and node.content is not None:
        yield from walk(node.content)


def naive_position(text: str, offset: int):
    """(line, column) by counting newlines up to offset."""
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1)
    return line, column
