from tree_sitter import Node
from typing import Callable, Iterator, Optional, List

from .models import ErrorInfo


class ASTWalker:
    """Utilities for traversing and searching the JSX/TSX AST"""

    @staticmethod
    def iter_preorder(node: Node) -> Iterator[Node]:
        """Yield ``node`` and its descendants in pre-order (document order)"""
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    @staticmethod
    def find_first(node: Node, predicate: Callable[[Node], bool]) -> Optional[Node]:
        """Return the first node in pre-order satisfying ``predicate``"""
        for current in ASTWalker.iter_preorder(node):
            if predicate(current):
                return current
        return None

    @staticmethod
    def find_parent_of_type(node: Node, *type_names: str) -> Optional[Node]:
        """Find the first parent node of one of the given types"""
        current = node.parent
        while current:
            if current.type in type_names:
                return current
            current = current.parent
        return None

    @staticmethod
    def get_child_of_type(node: Node, type_name: str) -> Optional[Node]:
        """Find the first direct child of a specific type"""
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    @staticmethod
    def get_children_of_type(node: Node, type_name: str) -> List[Node]:
        return [child for child in node.children if child.type == type_name]

    @staticmethod
    def find_all_by_type(node: Node, type_name: str) -> List[Node]:
        """Find all descendant nodes of a specific type"""
        return [n for n in ASTWalker.iter_preorder(node) if n.type == type_name]

    @staticmethod
    def get_text(node: Node, source: bytes | str | None = None) -> str:
        """Text of a node, sliced from ``source`` or from the tree's own copy"""
        if source is None:
            return node.text.decode("utf-8") if node.text is not None else ""
        if isinstance(source, str):
            source = source.encode("utf-8")
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def collect_errors(node: Node, source: bytes | str | None = None) -> List[ErrorInfo]:
        """Every ERROR and MISSING node below ``node``, in document order.

        Only subtrees flagged with ``has_error`` are descended into.
        """
        errors = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "ERROR" or current.is_missing:
                node_type = f"MISSING {current.type}" if current.is_missing else current.type
                text = ASTWalker.get_text(current, source).strip().replace("\n", " ")
                errors.append(
                    ErrorInfo(
                        line=current.start_point[0] + 1,
                        column=current.start_point[1] + 1,
                        node_type=node_type,
                        text=text[:40],
                    )
                )
            if current.has_error:
                stack.extend(reversed(current.children))
        return errors
