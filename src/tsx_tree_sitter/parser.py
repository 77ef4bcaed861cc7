"""Tree-sitter parser wrapper for JavaScript, TypeScript and TSX sources."""

import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Callable, Dict

import tree_sitter_javascript as tsj
import tree_sitter_typescript as tst
from tree_sitter import Language, Parser, Tree

from .ast_walker import ASTWalker
from .node_types import ParseResult

logger = logging.getLogger(__name__)


class Dialect(str, Enum):
    TSX = "tsx"
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"

    @classmethod
    def for_path(cls, path: Path | str) -> "Dialect":
        """Pick a grammar from a file suffix; unknown suffixes use TSX"""
        suffix = Path(path).suffix.lower()
        if suffix in (".js", ".jsx", ".mjs", ".cjs"):
            return cls.JAVASCRIPT
        if suffix in (".ts", ".mts", ".cts"):
            return cls.TYPESCRIPT
        return cls.TSX


_GRAMMARS: Dict[Dialect, Callable[[], object]] = {
    Dialect.TSX: tst.language_tsx,
    Dialect.TYPESCRIPT: tst.language_typescript,
    Dialect.JAVASCRIPT: tsj.language,
}

_LANGUAGES: Dict[Dialect, Language] = {}
_LANGUAGE_LOCK = threading.Lock()


def load_language(dialect: Dialect | str = Dialect.TSX) -> Language:
    """Load a grammar once per process.

    Callers racing on the first load block on the same lock and all receive
    the one ``Language`` instance that was created.
    """
    dialect = Dialect(dialect)
    with _LANGUAGE_LOCK:
        language = _LANGUAGES.get(dialect)
        if language is None:
            logger.debug("Loading tree-sitter grammar for %s", dialect.value)
            language = Language(_GRAMMARS[dialect]())
            _LANGUAGES[dialect] = language
        return language


class TSXParser:
    """Parses source text into error-tolerant tree-sitter trees.

    A ``Language`` loaded by the composition root can be handed in so that
    every parser instance shares it; each instance still owns its own
    ``tree_sitter.Parser``.
    """

    def __init__(self, language: Language | None = None, dialect: Dialect | str = Dialect.TSX):
        self.language = language if language is not None else load_language(dialect)
        self._parser = Parser(self.language)

    def parse(self, source: str | bytes) -> Tree:
        """Parse source text. Never raises on malformed input."""
        if isinstance(source, str):
            source = source.encode("utf-8")
        return self._parser.parse(source)

    def parse_string(self, source: str | bytes) -> ParseResult:
        if isinstance(source, str):
            source = source.encode("utf-8")
        tree = self._parser.parse(source)
        errors = ASTWalker.collect_errors(tree.root_node, source) if tree.root_node.has_error else []
        if errors:
            logger.debug("Parsed %d bytes with %d syntax errors", len(source), len(errors))
        return ParseResult(tree=tree, source=source, errors=errors)

    def parse_file(self, file_path: Path) -> ParseResult:
        with open(file_path, "rb") as f:
            return self.parse_string(f.read())
