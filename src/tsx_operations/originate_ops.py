import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from tree_sitter import Node

from tsx_modifier import ModifierConfig
from tsx_tree_sitter import ASTWalker, TSXParser

from . import templates
from .models import AddContextProviderOperation, AddZustandStoreOperation, ExtractComponentOperation

logger = logging.getLogger(__name__)

_TAG_TYPES = frozenset({"jsx_opening_element", "jsx_closing_element", "jsx_self_closing_element"})
_PARAMETER_OWNERS = frozenset({"arrow_function", "function_expression", "function"})

# Names that are never props of an extracted component
_AMBIENT_NAMES = frozenset(
    {
        "undefined", "NaN", "Infinity", "console", "window", "document", "globalThis",
        "Math", "JSON", "Date", "Object", "Array", "String", "Number", "Boolean", "Promise", "React",
    }
)


class BaseOriginateOperation(ABC):
    """Base class for operations that create a new file instead of editing one."""

    operation_type: str = ""

    @abstractmethod
    def originate(self, op: Any, config: ModifierConfig, parser: TSXParser) -> Tuple[str, str]:
        """Return the new file's source and a description of what was done.

        ``parser`` belongs to this call and may be used to inspect operation fields.
        """
        pass


class AddContextProvider(BaseOriginateOperation):
    operation_type = "AST_ADD_CONTEXT_PROVIDER"

    def originate(self, op: AddContextProviderOperation, config: ModifierConfig,
                  parser: TSXParser) -> Tuple[str, str]:
        code = templates.context_provider(
            config,
            context_name=op.context_name,
            provider_name=op.provider_name or f"{op.context_name}Provider",
            hook_name=op.hook_name or f"use{op.context_name}",
            initial_value=op.initial_value,
            value_type=op.value_type,
            state_variables=op.state_variables,
            include_state=op.include_state,
        )
        return code, f"Created Context Provider: {op.context_name}"


class AddZustandStore(BaseOriginateOperation):
    operation_type = "AST_ADD_ZUSTAND_STORE"

    def originate(self, op: AddZustandStoreOperation, config: ModifierConfig,
                  parser: TSXParser) -> Tuple[str, str]:
        code = templates.zustand_store(
            config,
            store_name=op.store_name,
            initial_state=op.initial_state,
            actions=op.actions,
            persist=op.persist,
            persist_key=op.persist_key,
        )
        return code, f"Created Zustand store: {op.store_name}"


def _bound_names(root: Node) -> set:
    """Parameter names introduced by functions inside the fragment"""
    names = set()
    for node in ASTWalker.iter_preorder(root):
        if node.type not in _PARAMETER_OWNERS:
            continue
        for field_name in ("parameter", "parameters"):
            params = node.child_by_field_name(field_name)
            if params is None:
                continue
            for child in ASTWalker.iter_preorder(params):
                if child.type in ("identifier", "shorthand_property_identifier_pattern"):
                    names.add(ASTWalker.get_text(child))
    return names


def _in_expression_container(node: Node) -> bool:
    current = node.parent
    while current is not None:
        if current.type == "jsx_expression":
            return True
        if current.type in _TAG_TYPES:
            return False
        current = current.parent
    return False


def detect_props(jsx: str, parser: Optional[TSXParser] = None) -> List[str]:
    """Free identifiers used in ``{...}`` containers of a JSX fragment, in order of first use"""
    parser = parser or TSXParser()
    result = parser.parse_string(f"<>{jsx}</>")
    if result.has_error:
        logger.debug("Extracted JSX does not parse cleanly; prop detection may be partial")

    root = result.tree.root_node
    bound = _bound_names(root)
    props: List[str] = []
    for node in ASTWalker.iter_preorder(root):
        if node.type not in ("identifier", "shorthand_property_identifier"):
            continue
        if not _in_expression_container(node):
            continue
        name = ASTWalker.get_text(node)
        if name in bound or name in _AMBIENT_NAMES or name in props:
            continue
        props.append(name)
    return props


class ExtractComponent(BaseOriginateOperation):
    operation_type = "AST_EXTRACT_COMPONENT"

    def originate(self, op: ExtractComponentOperation, config: ModifierConfig,
                  parser: TSXParser) -> Tuple[str, str]:
        prop_types = op.prop_types
        if not prop_types and op.extract_props:
            prop_types = {name: "any" for name in detect_props(op.target_jsx, parser)}
        code = templates.extracted_component(config, op.component_name, op.target_jsx, prop_types or None)
        return code, f"Extracted component: {op.component_name}"
