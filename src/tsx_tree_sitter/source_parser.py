"""Structural queries over JSX/TSX syntax trees.

Every lookup is purely syntactic. When several bindings share a name, the
first one met in a pre-order walk of the whole tree is returned; shadowing
and scopes are not taken into account.

All finders accept ``None`` for the tree and answer ``None`` (or an error
entry from ``collect_errors``) instead of raising, so callers can treat
"no tree" like any other failed lookup.
"""

import logging
from typing import List, Optional, Tuple

from tree_sitter import Language, Node, Tree

from .ast_walker import ASTWalker
from .jsx_patterns import JSXPatterns
from .models import (
    ErrorInfo,
    FunctionKind,
    FunctionMatch,
    ImportInfo,
    StateVariable,
    VariableKind,
    VariableMatch,
)
from .node_types import DECLARATION_KINDS, NodeKind
from .parser import Dialect, TSXParser

logger = logging.getLogger(__name__)

NO_TREE = "NO_TREE"


class SourceParser:
    """Parses source text and answers finder queries against the tree."""

    def __init__(self, parser: TSXParser | None = None, language: Language | None = None,
                 dialect: Dialect | str = Dialect.TSX):
        self.parser = parser if parser is not None else TSXParser(language=language, dialect=dialect)

    def parse(self, text: str | bytes) -> Tree:
        return self.parser.parse(text)

    @staticmethod
    def _root(tree: Optional[Tree]) -> Optional[Node]:
        if tree is None:
            logger.debug("Query on an absent tree")
            return None
        return tree.root_node

    # Functions

    def find_function_by_name(self, tree: Optional[Tree], name: str) -> Optional[FunctionMatch]:
        """Find ``function name(){}``, ``const name = () => {}`` or ``const name = function(){}``"""
        root = self._root(tree)
        if root is None:
            return None

        for node in ASTWalker.iter_preorder(root):
            kind = NodeKind.of(node)
            if kind in DECLARATION_KINDS:
                name_node = node.child_by_field_name("name")
                if name_node is not None and ASTWalker.get_text(name_node) == name:
                    return FunctionMatch(kind=FunctionKind.DECLARATION, node=node, name=name)
            elif kind is NodeKind.VARIABLE_DECLARATOR:
                name_node = node.child_by_field_name("name")
                if NodeKind.of(name_node) is not NodeKind.IDENTIFIER or ASTWalker.get_text(name_node) != name:
                    continue
                func = JSXPatterns.function_from_value(node.child_by_field_name("value"))
                if func is not None:
                    return FunctionMatch(
                        kind=JSXPatterns.function_kind(func), node=func, name=name, declarator_node=node
                    )
        return None

    def match_function_node(self, func: Node) -> Optional[FunctionMatch]:
        """Wrap a bare function node into a ``FunctionMatch``"""
        kind = JSXPatterns.function_kind(func)
        if kind is None:
            return None
        declarator = None
        if kind is not FunctionKind.DECLARATION:
            parent = ASTWalker.find_parent_of_type(func, "variable_declarator")
            if parent is not None and JSXPatterns.function_from_value(parent.child_by_field_name("value")) == func:
                declarator = parent
        return FunctionMatch(kind=kind, node=func, name=JSXPatterns.get_function_name(func),
                             declarator_node=declarator)

    def find_default_exported_function(self, tree: Optional[Tree]) -> Optional[Node]:
        """Function behind ``export default``; names and ``memo(...)`` wrappers are resolved"""
        root = self._root(tree)
        if root is None:
            return None

        for node in ASTWalker.find_all_by_type(root, "export_statement"):
            if not JSXPatterns.is_default_export(node):
                continue
            declaration = node.child_by_field_name("declaration")
            if NodeKind.of(declaration) in DECLARATION_KINDS:
                return declaration

            value = JSXPatterns.unwrap_parenthesized(node.child_by_field_name("value"))
            if value is None:
                continue
            func = JSXPatterns.function_from_value(value)
            if func is not None:
                return func

            target = value
            if NodeKind.of(value) is NodeKind.CALL_EXPRESSION:
                target = JSXPatterns.first_named_child(value.child_by_field_name("arguments"))
            if NodeKind.of(target) is NodeKind.IDENTIFIER:
                match = self.find_function_by_name(tree, ASTWalker.get_text(target))
                if match is not None:
                    return match.node
        return None

    def find_component_function(self, tree: Optional[Tree], name: Optional[str] = None) -> Optional[FunctionMatch]:
        """The function hooks should go into.

        Uses ``name`` when given; otherwise the default export, then the first
        capitalized function, then the first function of any name.
        """
        if name:
            return self.find_function_by_name(tree, name)

        root = self._root(tree)
        if root is None:
            return None

        exported = self.find_default_exported_function(tree)
        if exported is not None:
            return self.match_function_node(exported)

        first = None
        for node in ASTWalker.iter_preorder(root):
            if JSXPatterns.function_kind(node) is None:
                continue
            match = self.match_function_node(node)
            if match is None or not match.name:
                continue
            if match.name[0].isupper():
                return match
            if first is None:
                first = match
        return first

    def find_return_statement(self, func: Node) -> Optional[Node]:
        """Last ``return`` directly inside a function body"""
        body = func.child_by_field_name("body")
        if NodeKind.of(body) is not NodeKind.STATEMENT_BLOCK:
            return None
        returns = [s for s in JSXPatterns.statements(body) if NodeKind.of(s) is NodeKind.RETURN_STATEMENT]
        return returns[-1] if returns else None

    def find_return_jsx(self, func: Node) -> Optional[Node]:
        """JSX root a function returns, looking through parentheses"""
        body = func.child_by_field_name("body")
        if NodeKind.of(body) is NodeKind.STATEMENT_BLOCK:
            statement = self.find_return_statement(func)
            if statement is None:
                return None
            expression = JSXPatterns.first_named_child(statement)
        else:
            expression = body
        expression = JSXPatterns.unwrap_parenthesized(expression)
        return expression if JSXPatterns.is_jsx(expression) else None

    # Variables

    def find_variable_by_name(self, tree: Optional[Tree], name: str) -> Optional[VariableMatch]:
        """Find a binding: plain, array element, object shorthand or renamed property"""
        root = self._root(tree)
        if root is None:
            return None

        for declarator in ASTWalker.iter_preorder(root):
            if NodeKind.of(declarator) is not NodeKind.VARIABLE_DECLARATOR:
                continue
            pattern = declarator.child_by_field_name("name")
            kind = NodeKind.of(pattern)
            found = None
            if kind is NodeKind.IDENTIFIER:
                if ASTWalker.get_text(pattern) == name:
                    found = (VariableKind.SIMPLE, pattern, None)
            elif kind is NodeKind.ARRAY_PATTERN:
                found = self._search_array_pattern(pattern, name)
            elif kind is NodeKind.OBJECT_PATTERN:
                found = self._search_object_pattern(pattern, name)

            if found is not None:
                var_kind, name_node, original = found
                return VariableMatch(kind=var_kind, node=declarator, name_node=name_node, original_name=original)
        return None

    def _search_pattern(self, pattern: Node, name: str) -> Optional[Tuple[VariableKind, Node, Optional[str]]]:
        kind = NodeKind.of(pattern)
        if kind is NodeKind.ARRAY_PATTERN:
            return self._search_array_pattern(pattern, name)
        if kind is NodeKind.OBJECT_PATTERN:
            return self._search_object_pattern(pattern, name)
        return None

    def _search_array_pattern(self, pattern: Node, name: str):
        for element in pattern.named_children:
            kind = NodeKind.of(element)
            if kind in (NodeKind.ASSIGNMENT_PATTERN, NodeKind.REST_PATTERN):
                target = element.child_by_field_name("left") or JSXPatterns.first_named_child(element)
            else:
                target = element
            if NodeKind.of(target) is NodeKind.IDENTIFIER:
                if ASTWalker.get_text(target) == name:
                    return VariableKind.ARRAY_DESTRUCTURE, target, None
            elif target is not None:
                nested = self._search_pattern(target, name)
                if nested is not None:
                    return nested
        return None

    def _search_object_pattern(self, pattern: Node, name: str):
        for prop in pattern.named_children:
            kind = NodeKind.of(prop)
            if kind is NodeKind.SHORTHAND_PROPERTY_IDENTIFIER_PATTERN:
                if ASTWalker.get_text(prop) == name:
                    return VariableKind.OBJECT_DESTRUCTURE, prop, None
            elif kind is NodeKind.OBJECT_ASSIGNMENT_PATTERN:
                left = prop.child_by_field_name("left") or JSXPatterns.first_named_child(prop)
                if left is not None and ASTWalker.get_text(left) == name:
                    return VariableKind.OBJECT_DESTRUCTURE, left, None
            elif kind is NodeKind.REST_PATTERN:
                target = JSXPatterns.first_named_child(prop)
                if NodeKind.of(target) is NodeKind.IDENTIFIER and ASTWalker.get_text(target) == name:
                    return VariableKind.OBJECT_DESTRUCTURE, target, None
            elif kind is NodeKind.PAIR_PATTERN:
                key = prop.child_by_field_name("key")
                value = prop.child_by_field_name("value")
                if NodeKind.of(value) is NodeKind.ASSIGNMENT_PATTERN:
                    value = value.child_by_field_name("left")
                if NodeKind.of(value) is NodeKind.IDENTIFIER:
                    if ASTWalker.get_text(value) == name:
                        original = JSXPatterns.get_string_value(key) if key is not None else None
                        return VariableKind.OBJECT_DESTRUCTURE_RENAMED, value, original
                elif value is not None:
                    nested = self._search_pattern(value, name)
                    if nested is not None:
                        return nested
        return None

    def find_state_variable_patterns(self, tree: Optional[Tree]) -> List[StateVariable]:
        """All ``const [x, setX] = useState(...)`` declarations in document order"""
        root = self._root(tree)
        if root is None:
            return []

        states = []
        for declarator in ASTWalker.find_all_by_type(root, "variable_declarator"):
            pattern = declarator.child_by_field_name("name")
            value = declarator.child_by_field_name("value")
            if NodeKind.of(pattern) is not NodeKind.ARRAY_PATTERN:
                continue
            if JSXPatterns.get_callee_name(value) != "useState":
                continue

            elements = [
                ASTWalker.get_text(e) for e in pattern.named_children if NodeKind.of(e) is NodeKind.IDENTIFIER
            ]
            if not elements:
                continue
            argument = JSXPatterns.first_named_child(value.child_by_field_name("arguments"))
            states.append(
                StateVariable(
                    state_var=elements[0],
                    setter_var=elements[1] if len(elements) > 1 else "",
                    node=declarator,
                    initial_value=ASTWalker.get_text(argument) if argument is not None else None,
                )
            )
        return states

    # JSX

    def find_component_by_tag(self, tree: Optional[Tree], tag_name: str) -> Optional[Node]:
        """First JSX element (paired or self-closing) whose tag is ``tag_name``"""
        root = self._root(tree)
        if root is None:
            return None
        return ASTWalker.find_first(
            root,
            lambda n: NodeKind.of(n) in (NodeKind.JSX_ELEMENT, NodeKind.JSX_SELF_CLOSING_ELEMENT)
            and JSXPatterns.get_jsx_tag_name(n) == tag_name,
        )

    def find_all_components_by_tag(self, tree: Optional[Tree], tag_name: str) -> List[Node]:
        root = self._root(tree)
        if root is None:
            return []
        return [
            n
            for n in ASTWalker.iter_preorder(root)
            if NodeKind.of(n) in (NodeKind.JSX_ELEMENT, NodeKind.JSX_SELF_CLOSING_ELEMENT)
            and JSXPatterns.get_jsx_tag_name(n) == tag_name
        ]

    # Imports

    def find_imports(self, tree: Optional[Tree]) -> List[Node]:
        root = self._root(tree)
        if root is None:
            return []
        return ASTWalker.find_all_by_type(root, "import_statement")

    def get_import_info(self, node: Node) -> ImportInfo:
        source_node = node.child_by_field_name("source") or ASTWalker.get_child_of_type(node, "string")
        info = ImportInfo(
            source=JSXPatterns.get_string_value(source_node) if source_node is not None else "",
            node=node,
            is_type_only=any(child.type == "type" for child in node.children),
        )

        clause = ASTWalker.get_child_of_type(node, "import_clause")
        if clause is None:
            return info
        for child in clause.named_children:
            kind = NodeKind.of(child)
            if kind is NodeKind.IDENTIFIER:
                info.default_import = ASTWalker.get_text(child)
            elif kind is NodeKind.NAMESPACE_IMPORT:
                alias = JSXPatterns.first_named_child(child)
                info.namespace_import = ASTWalker.get_text(alias) if alias is not None else None
            elif kind is NodeKind.NAMED_IMPORTS:
                info.named_imports = [
                    self._specifier_name(spec) for spec in ASTWalker.get_children_of_type(child, "import_specifier")
                ]
        return info

    @staticmethod
    def _specifier_name(spec: Node) -> str:
        """``name`` or ``name as alias``, without an inline ``type`` modifier"""
        name = spec.child_by_field_name("name")
        if name is None:
            return ASTWalker.get_text(spec)
        alias = spec.child_by_field_name("alias")
        if alias is None:
            return ASTWalker.get_text(name)
        return f"{ASTWalker.get_text(name)} as {ASTWalker.get_text(alias)}"

    def find_import_by_source(self, tree: Optional[Tree], source: str) -> Optional[ImportInfo]:
        for node in self.find_imports(tree):
            info = self.get_import_info(node)
            if info.source == source:
                return info
        return None

    # Errors

    def collect_errors(self, tree: Optional[Tree]) -> List[ErrorInfo]:
        """Line/column/type of every ERROR and MISSING node"""
        root = self._root(tree)
        if root is None:
            return [ErrorInfo(line=0, column=0, node_type=NO_TREE, text="no syntax tree available")]
        return ASTWalker.collect_errors(root)
