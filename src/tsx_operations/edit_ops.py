from abc import ABC, abstractmethod
from typing import Any

from tree_sitter import Node

from tsx_modifier import (
    ASTModifier,
    InsertJSXSpec,
    InsertPosition,
    NodeNotFoundError,
    PropAction,
    PropSpec,
    WrapperSpec,
)

from .models import (
    AddCallbackOperation,
    AddImportOperation,
    AddMemoOperation,
    AddReducerOperation,
    AddRefOperation,
    AddStateOperation,
    AddUseEffectOperation,
    InsertJSXOperation,
    ModifyClassNameOperation,
    ModifyPropOperation,
    WrapElementOperation,
)


class BaseEditOperation(ABC):
    """Base class for operations that queue edits on an existing file."""

    operation_type: str = ""

    @abstractmethod
    def apply(self, modifier: ASTModifier, op: Any) -> str:
        """Queue modifications and return a description of what was done."""
        pass

    # Helper for the element-targeting operations
    def _find_element(self, modifier: ASTModifier, tag: str) -> Node:
        element = modifier.parser.find_component_by_tag(modifier.tree, tag)
        if element is None:
            raise NodeNotFoundError("JSX element", tag)
        return element


class WrapElement(BaseEditOperation):
    operation_type = "AST_WRAP_ELEMENT"

    def apply(self, modifier: ASTModifier, op: WrapElementOperation) -> str:
        element = self._find_element(modifier, op.target_element)
        spec = WrapperSpec(
            component=op.wrapper_component,
            props=op.wrapper_props,
            import_spec=op.import_.to_spec() if op.import_ is not None else None,
        )
        modifier.wrap_element(element, spec)
        return f"Wrapped {op.target_element} in {op.wrapper_component}"


class AddState(BaseEditOperation):
    operation_type = "AST_ADD_STATE"

    def apply(self, modifier: ASTModifier, op: AddStateOperation) -> str:
        modifier.add_state_variable(op.to_spec(), op.target_function)
        return f"Added state variable: {op.name}"


class AddImport(BaseEditOperation):
    operation_type = "AST_ADD_IMPORT"

    def apply(self, modifier: ASTModifier, op: AddImportOperation) -> str:
        modifier.add_import(op.to_spec())
        return f"Added import from {op.source}"


class ModifyClassName(BaseEditOperation):
    operation_type = "AST_MODIFY_CLASSNAME"

    def apply(self, modifier: ASTModifier, op: ModifyClassNameOperation) -> str:
        element = self._find_element(modifier, op.target_element)
        modifier.modify_class_name(element, op.to_spec())
        return f"Modified className on {op.target_element}"


class InsertJSX(BaseEditOperation):
    operation_type = "AST_INSERT_JSX"

    def apply(self, modifier: ASTModifier, op: InsertJSXOperation) -> str:
        element = self._find_element(modifier, op.target_element)
        modifier.insert_jsx(element, InsertJSXSpec(jsx=op.jsx, position=InsertPosition(op.position)))
        return f"Inserted JSX {op.position} {op.target_element}"


class AddUseEffect(BaseEditOperation):
    operation_type = "AST_ADD_USEEFFECT"

    def apply(self, modifier: ASTModifier, op: AddUseEffectOperation) -> str:
        modifier.add_use_effect(op.to_spec(), op.target_function)
        return "Added useEffect hook"


class ModifyProp(BaseEditOperation):
    operation_type = "AST_MODIFY_PROP"

    def apply(self, modifier: ASTModifier, op: ModifyPropOperation) -> str:
        element = self._find_element(modifier, op.target_element)
        spec = PropSpec(name=op.prop_name, value=op.prop_value, action=PropAction(op.action))
        modifier.modify_prop(element, spec)
        return f"Modified prop {op.prop_name} on {op.target_element}"


class AddRef(BaseEditOperation):
    operation_type = "AST_ADD_REF"

    def apply(self, modifier: ASTModifier, op: AddRefOperation) -> str:
        modifier.add_ref(op.to_spec(), op.target_function)
        return f"Added ref variable: {op.name}"


class AddMemo(BaseEditOperation):
    operation_type = "AST_ADD_MEMO"

    def apply(self, modifier: ASTModifier, op: AddMemoOperation) -> str:
        modifier.add_memo(op.to_spec(), op.target_function)
        return f"Added memoized variable: {op.name}"


class AddCallback(BaseEditOperation):
    operation_type = "AST_ADD_CALLBACK"

    def apply(self, modifier: ASTModifier, op: AddCallbackOperation) -> str:
        modifier.add_callback(op.to_spec(), op.target_function)
        return f"Added callback function: {op.name}"


class AddReducer(BaseEditOperation):
    operation_type = "AST_ADD_REDUCER"

    def apply(self, modifier: ASTModifier, op: AddReducerOperation) -> str:
        modifier.add_reducer(op.to_spec(), op.target_function)
        return f"Added useReducer with {len(op.actions)} actions"
