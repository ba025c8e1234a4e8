"""
scssparse - SCSS Parser

A recursive-descent parser that turns SCSS stylesheets into a
position-annotated block tree, and parses standalone values and selectors.
"""

__version__ = "0.1.0"
__author__ = "scssparse contributors"

from scssparse.parser import parse_file, parse_source
