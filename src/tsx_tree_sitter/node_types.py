from dataclasses import dataclass, field
from enum import Enum
from typing import List

from tree_sitter import Node, Tree

from .models import ErrorInfo


class NodeKind(Enum):
    """Node shapes the engine matches on. Anything else maps to OTHER."""

    PROGRAM = "program"
    ERROR = "ERROR"
    COMMENT = "comment"

    FUNCTION_DECLARATION = "function_declaration"
    GENERATOR_FUNCTION_DECLARATION = "generator_function_declaration"
    FUNCTION_EXPRESSION = "function_expression"
    LEGACY_FUNCTION = "function"
    GENERATOR_FUNCTION = "generator_function"
    ARROW_FUNCTION = "arrow_function"
    STATEMENT_BLOCK = "statement_block"
    RETURN_STATEMENT = "return_statement"
    EXPRESSION_STATEMENT = "expression_statement"

    LEXICAL_DECLARATION = "lexical_declaration"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    IDENTIFIER = "identifier"
    OBJECT_PATTERN = "object_pattern"
    ARRAY_PATTERN = "array_pattern"
    PAIR_PATTERN = "pair_pattern"
    SHORTHAND_PROPERTY_IDENTIFIER_PATTERN = "shorthand_property_identifier_pattern"
    OBJECT_ASSIGNMENT_PATTERN = "object_assignment_pattern"
    ASSIGNMENT_PATTERN = "assignment_pattern"
    REST_PATTERN = "rest_pattern"

    CALL_EXPRESSION = "call_expression"
    MEMBER_EXPRESSION = "member_expression"
    PARENTHESIZED_EXPRESSION = "parenthesized_expression"
    STRING = "string"
    TEMPLATE_STRING = "template_string"

    IMPORT_STATEMENT = "import_statement"
    IMPORT_CLAUSE = "import_clause"
    NAMED_IMPORTS = "named_imports"
    IMPORT_SPECIFIER = "import_specifier"
    NAMESPACE_IMPORT = "namespace_import"
    EXPORT_STATEMENT = "export_statement"

    JSX_ELEMENT = "jsx_element"
    JSX_SELF_CLOSING_ELEMENT = "jsx_self_closing_element"
    JSX_FRAGMENT = "jsx_fragment"
    JSX_OPENING_ELEMENT = "jsx_opening_element"
    JSX_CLOSING_ELEMENT = "jsx_closing_element"
    JSX_ATTRIBUTE = "jsx_attribute"
    JSX_EXPRESSION = "jsx_expression"
    JSX_TEXT = "jsx_text"

    OTHER = "other"

    @classmethod
    def of(cls, node: Node | None) -> "NodeKind":
        """Classify a tree-sitter node; unmodeled types become OTHER."""
        if node is None:
            return cls.OTHER
        try:
            return cls(node.type)
        except ValueError:
            return cls.OTHER


DECLARATION_KINDS = frozenset({NodeKind.FUNCTION_DECLARATION, NodeKind.GENERATOR_FUNCTION_DECLARATION})
EXPRESSION_FUNCTION_KINDS = frozenset(
    {NodeKind.FUNCTION_EXPRESSION, NodeKind.LEGACY_FUNCTION, NodeKind.GENERATOR_FUNCTION}
)
FUNCTION_KINDS = DECLARATION_KINDS | EXPRESSION_FUNCTION_KINDS | {NodeKind.ARROW_FUNCTION}
JSX_ROOT_KINDS = frozenset({NodeKind.JSX_ELEMENT, NodeKind.JSX_SELF_CLOSING_ELEMENT, NodeKind.JSX_FRAGMENT})
DECLARATION_STATEMENT_KINDS = frozenset({NodeKind.LEXICAL_DECLARATION, NodeKind.VARIABLE_DECLARATION})


@dataclass
class ParseResult:
    """Result of a tree-sitter parse operation.

    ``source`` holds the exact bytes that were parsed; every node offset in
    ``tree`` refers to it.
    """

    tree: Tree
    source: bytes
    errors: List[ErrorInfo] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.source.decode("utf-8")

    @property
    def has_error(self) -> bool:
        return self.tree.root_node.has_error
