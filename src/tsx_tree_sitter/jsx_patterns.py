"""JSX/React-specific AST pattern recognition."""

from typing import List, Optional

from tree_sitter import Node

from .ast_walker import ASTWalker
from .models import FunctionKind
from .node_types import (
    DECLARATION_KINDS,
    DECLARATION_STATEMENT_KINDS,
    EXPRESSION_FUNCTION_KINDS,
    JSX_ROOT_KINDS,
    NodeKind,
)

# Ordering of hook declarations at the top of a component body
HOOK_RANKS = {
    "useState": 0,
    "useReducer": 1,
    "useContext": 2,
    "useRef": 3,
    "useMemo": 4,
    "useCallback": 5,
}


class JSXPatterns:
    """Recognize React/JSX patterns in the AST."""

    @staticmethod
    def function_kind(node: Node) -> Optional[FunctionKind]:
        kind = NodeKind.of(node)
        if kind in DECLARATION_KINDS:
            return FunctionKind.DECLARATION
        if kind is NodeKind.ARROW_FUNCTION:
            return FunctionKind.ARROW
        if kind in EXPRESSION_FUNCTION_KINDS:
            return FunctionKind.EXPRESSION
        return None

    @staticmethod
    def first_named_child(node: Optional[Node]) -> Optional[Node]:
        """First named child that is not a comment"""
        if node is None:
            return None
        for child in node.named_children:
            if NodeKind.of(child) is not NodeKind.COMMENT:
                return child
        return None

    @staticmethod
    def statements(block: Optional[Node]) -> List[Node]:
        """Direct statements of a block or program, comments excluded"""
        if block is None:
            return []
        return [c for c in block.named_children if NodeKind.of(c) is not NodeKind.COMMENT]

    @staticmethod
    def unwrap_parenthesized(node: Optional[Node]) -> Optional[Node]:
        """Strip any number of enclosing parentheses from an expression"""
        while node is not None and NodeKind.of(node) is NodeKind.PARENTHESIZED_EXPRESSION:
            node = JSXPatterns.first_named_child(node)
        return node

    @staticmethod
    def function_from_value(value: Optional[Node]) -> Optional[Node]:
        """The function bound by a declarator value.

        Handles direct functions and single-wrapper calls such as
        ``memo(() => ...)`` or ``forwardRef(function () {...})``.
        """
        value = JSXPatterns.unwrap_parenthesized(value)
        if value is None:
            return None
        if JSXPatterns.function_kind(value) is not None:
            return value
        if NodeKind.of(value) is NodeKind.CALL_EXPRESSION:
            argument = JSXPatterns.first_named_child(value.child_by_field_name("arguments"))
            argument = JSXPatterns.unwrap_parenthesized(argument)
            if argument is not None and JSXPatterns.function_kind(argument) in (
                FunctionKind.ARROW,
                FunctionKind.EXPRESSION,
            ):
                return argument
        return None

    @staticmethod
    def get_function_name(func_node: Node) -> Optional[str]:
        """Name of a function declaration, or of the variable an expression is bound to"""
        if NodeKind.of(func_node) in DECLARATION_KINDS:
            name_node = func_node.child_by_field_name("name")
            return ASTWalker.get_text(name_node) if name_node else None

        declarator = ASTWalker.find_parent_of_type(func_node, "variable_declarator")
        if declarator is not None and JSXPatterns.function_from_value(
            declarator.child_by_field_name("value")
        ) == func_node:
            name_node = declarator.child_by_field_name("name")
            if NodeKind.of(name_node) is NodeKind.IDENTIFIER:
                return ASTWalker.get_text(name_node)
        return None

    @staticmethod
    def top_level_statement(node: Node) -> Node:
        """The ancestor of ``node`` that is a direct child of the program"""
        current = node
        while current.parent is not None and NodeKind.of(current.parent) is not NodeKind.PROGRAM:
            current = current.parent
        return current

    @staticmethod
    def is_hook_name(name: str) -> bool:
        return len(name) > 3 and name.startswith("use") and name[3].isupper()

    @staticmethod
    def get_callee_name(call: Optional[Node]) -> Optional[str]:
        if NodeKind.of(call) is not NodeKind.CALL_EXPRESSION:
            return None
        callee = call.child_by_field_name("function")
        return ASTWalker.get_text(callee) if callee is not None else None

    @staticmethod
    def hook_name_of_statement(statement: Node) -> Optional[str]:
        """Hook called by a top-level body statement, if any.

        Recognizes ``const x = useX(...)`` and bare ``useX(...);`` calls.
        """
        kind = NodeKind.of(statement)
        if kind in DECLARATION_STATEMENT_KINDS:
            for declarator in ASTWalker.get_children_of_type(statement, "variable_declarator"):
                name = JSXPatterns.get_callee_name(declarator.child_by_field_name("value"))
                if name and JSXPatterns.is_hook_name(name):
                    return name
        elif kind is NodeKind.EXPRESSION_STATEMENT:
            name = JSXPatterns.get_callee_name(JSXPatterns.first_named_child(statement))
            if name and JSXPatterns.is_hook_name(name):
                return name
        return None

    @staticmethod
    def is_directive(statement: Node) -> bool:
        """``'use client';`` style prologue directive"""
        if NodeKind.of(statement) is not NodeKind.EXPRESSION_STATEMENT:
            return False
        return NodeKind.of(JSXPatterns.first_named_child(statement)) is NodeKind.STRING

    @staticmethod
    def is_default_export(node: Node) -> bool:
        if NodeKind.of(node) is not NodeKind.EXPORT_STATEMENT:
            return False
        return any(child.type == "default" for child in node.children)

    @staticmethod
    def get_string_value(node: Node) -> str:
        text = ASTWalker.get_text(node)
        if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
            return text[1:-1]
        return text

    # JSX

    @staticmethod
    def is_jsx(node: Optional[Node]) -> bool:
        return NodeKind.of(node) in JSX_ROOT_KINDS

    @staticmethod
    def get_opening_element(node: Node) -> Optional[Node]:
        kind = NodeKind.of(node)
        if kind is NodeKind.JSX_SELF_CLOSING_ELEMENT:
            return node
        if kind in (NodeKind.JSX_ELEMENT, NodeKind.JSX_FRAGMENT):
            return node.child_by_field_name("open_tag") or ASTWalker.get_child_of_type(
                node, "jsx_opening_element"
            )
        return None

    @staticmethod
    def get_closing_element(node: Node) -> Optional[Node]:
        if NodeKind.of(node) in (NodeKind.JSX_ELEMENT, NodeKind.JSX_FRAGMENT):
            return node.child_by_field_name("close_tag") or ASTWalker.get_child_of_type(
                node, "jsx_closing_element"
            )
        return None

    @staticmethod
    def get_tag_name_node(node: Node) -> Optional[Node]:
        opening = JSXPatterns.get_opening_element(node)
        if opening is None:
            return None
        return opening.child_by_field_name("name")

    @staticmethod
    def get_jsx_tag_name(node: Node) -> Optional[str]:
        """Tag name of a JSX element; ``None`` for fragments"""
        name_node = JSXPatterns.get_tag_name_node(node)
        return ASTWalker.get_text(name_node) if name_node is not None else None

    @staticmethod
    def get_jsx_attributes(node: Node) -> List[Node]:
        opening = JSXPatterns.get_opening_element(node)
        if opening is None:
            return []
        return ASTWalker.get_children_of_type(opening, "jsx_attribute")

    @staticmethod
    def get_attribute_name(attribute: Node) -> Optional[str]:
        name_node = JSXPatterns.first_named_child(attribute)
        return ASTWalker.get_text(name_node) if name_node is not None else None

    @staticmethod
    def get_attribute_value(attribute: Node) -> Optional[Node]:
        """Value node after ``=``; ``None`` for boolean attributes"""
        named = [c for c in attribute.named_children if NodeKind.of(c) is not NodeKind.COMMENT]
        return named[1] if len(named) > 1 else None

    @staticmethod
    def find_jsx_attribute(node: Node, name: str) -> Optional[Node]:
        for attribute in JSXPatterns.get_jsx_attributes(node):
            if JSXPatterns.get_attribute_name(attribute) == name:
                return attribute
        return None

    @staticmethod
    def has_jsx_parent(node: Node) -> bool:
        """Whether ``node`` sits directly among the children of another JSX element"""
        parent = node.parent
        return parent is not None and NodeKind.of(parent) in (NodeKind.JSX_ELEMENT, NodeKind.JSX_FRAGMENT)
