"""
CLI entry point for scssparse.

Usage:
    scssparse parse <file>             Parse a stylesheet and show a tree summary
    scssparse value <text>             Parse a single value expression
    scssparse selector <text>          Parse a selector list
    scssparse config                   Show the effective configuration
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from scssparse import __version__
from scssparse.config import ConfigError, get_config, write_default_config
from scssparse.parser import ParseError, Parser, parse_file
from scssparse.parser.ast_serde import count_ast_nodes, serialize_ast
from scssparse.parser.nodes import Block

logger = logging.getLogger(__name__)


def describe(node) -> str:
    """One-line description of a tree child."""
    if isinstance(node, Block):
        selectors = ", ".join(str(s) for s in node.selectors) if node.selectors else ""
        label = f"@{node.kind.value}" if node.kind.value != "block" else "block"
        return f"{label} {selectors}".rstrip() + f" (line {node.line}, {len(node.children)} children)"
    name = getattr(node, 'name', None)
    text = type(node).__name__
    if name is not None:
        text += f" {name}"
    return text + f" (line {node.line})"


def _read_text(text: str) -> str:
    """`-` reads the text from stdin."""
    if text == '-':
        return sys.stdin.read()
    return text


def cmd_parse(args):
    """Parse a file and show tree summary."""
    config = get_config()

    try:
        root = parse_file(args.file, config)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(serialize_ast(root, filename=args.file, indent=2).decode('utf-8'))
        return 0

    data = root.to_dict()
    print(f"Parsed: {args.file}")
    print(f"Top-level entries: {len(root.children)}")
    print(f"Total nodes: {count_ast_nodes(data)}")

    if args.verbose:
        for child in root.children[:20]:
            print(f"  - {describe(child)}")
        if len(root.children) > 20:
            print(f"  ... and {len(root.children) - 20} more")

    return 0


def cmd_value(args):
    """Parse a value expression."""
    config = get_config()
    parser = Parser(config.source_name, encoding=config.encoding)

    try:
        value = parser.parse_value(_read_text(args.text))
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(serialize_ast(value, indent=2).decode('utf-8'))
    else:
        print(repr(value))
    return 0


def cmd_selector(args):
    """Parse a selector list."""
    config = get_config()
    parser = Parser(config.source_name, encoding=config.encoding)

    try:
        selectors = parser.parse_selector(_read_text(args.text))
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(serialize_ast(selectors, indent=2).decode('utf-8'))
    else:
        for selector in selectors:
            print(selector)
    return 0


def cmd_config(args):
    """Show the effective configuration, or write a default config file."""
    if args.init:
        path = write_default_config(Path(args.init) if args.init != '-' else None)
        print(f"Wrote default config: {path}")
        return 0

    print(json.dumps(get_config().to_dict(), indent=2))
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="SCSS parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    scssparse parse styles/main.scss -v
    scssparse parse styles/main.scss --json
    scssparse value "1px solid darken(\\$c, 10%)"
    scssparse selector "a > .b, #c:hover"
"""
    )
    parser.add_argument('--version', action='version', version=f'scssparse {__version__}')
    parser.add_argument('--config', help='Path to a YAML config file')
    parser.add_argument('--log-level', help='Logging level (overrides config)')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # parse
    parse_p = subparsers.add_parser('parse', help='Parse a stylesheet')
    parse_p.add_argument('file', help='File to parse')
    parse_p.add_argument('-v', '--verbose', action='store_true')
    parse_p.add_argument('--json', action='store_true', help='Print the tree as JSON')
    parse_p.set_defaults(func=cmd_parse)

    # value
    value_p = subparsers.add_parser('value', help='Parse a value expression')
    value_p.add_argument('text', help="Value text ('-' reads stdin)")
    value_p.add_argument('--json', action='store_true', help='Print the value as JSON')
    value_p.set_defaults(func=cmd_value)

    # selector
    selector_p = subparsers.add_parser('selector', help='Parse a selector list')
    selector_p.add_argument('text', help="Selector text ('-' reads stdin)")
    selector_p.add_argument('--json', action='store_true', help='Print the selectors as JSON')
    selector_p.set_defaults(func=cmd_selector)

    # config
    config_p = subparsers.add_parser('config', help='Show effective configuration')
    config_p.add_argument('--init', nargs='?', const='-', metavar='PATH',
                          help='Write a default config file (to ~/.scssparse/config.yaml without PATH)')
    config_p.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)

    try:
        config = get_config(Path(args.config) if args.config else None)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2

    level = (args.log_level or config.log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
