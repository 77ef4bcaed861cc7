"""
tsx_tree_sitter - tree-sitter parsing and structural queries for JSX/TSX

This package provides:
- Grammar loading and error-tolerant parsing (TSX, TypeScript, JavaScript)
- AST traversal helpers
- React/JSX pattern recognition
- Finder API for functions, bindings, JSX elements, imports and hooks
"""

from .ast_walker import ASTWalker
from .jsx_patterns import HOOK_RANKS, JSXPatterns
from .models import (
    ErrorInfo,
    FunctionKind,
    FunctionMatch,
    ImportInfo,
    StateVariable,
    VariableKind,
    VariableMatch,
)
from .node_types import NodeKind, ParseResult
from .parser import Dialect, TSXParser, load_language
from .source_parser import SourceParser

__all__ = [
    "ASTWalker",
    "Dialect",
    "ErrorInfo",
    "FunctionKind",
    "FunctionMatch",
    "HOOK_RANKS",
    "ImportInfo",
    "JSXPatterns",
    "NodeKind",
    "ParseResult",
    "SourceParser",
    "StateVariable",
    "TSXParser",
    "VariableKind",
    "VariableMatch",
    "load_language",
]
