from typing import Any, Dict, List, Optional, Protocol, Tuple

from tsx_modifier import ASTModifier, ModifierConfig
from tsx_tree_sitter import TSXParser


class EditOperation(Protocol):
    """Edits an existing file through a shared modifier"""

    operation_type: str

    def apply(self, modifier: ASTModifier, op: Any) -> str: ...


class OriginateOperation(Protocol):
    """Synthesizes a new file from an operation's fields; returns ``(code, description)``"""

    operation_type: str

    def originate(self, op: Any, config: ModifierConfig, parser: TSXParser) -> Tuple[str, str]: ...


class OperationRegistry:
    """Registry of operation handlers, keyed by the ``type`` discriminator"""

    def __init__(self):
        self._edit: Dict[str, EditOperation] = {}
        self._originate: Dict[str, OriginateOperation] = {}
        self._load_builtin_operations()

    def register_edit(self, operation: EditOperation):
        self._edit[operation.operation_type] = operation

    def register_originate(self, operation: OriginateOperation):
        self._originate[operation.operation_type] = operation

    def get_edit(self, operation_type: str) -> Optional[EditOperation]:
        return self._edit.get(operation_type)

    def get_originate(self, operation_type: str) -> Optional[OriginateOperation]:
        return self._originate.get(operation_type)

    def is_registered(self, operation_type: object) -> bool:
        return operation_type in self._edit or operation_type in self._originate

    def operation_types(self) -> List[str]:
        return sorted([*self._edit, *self._originate])

    def _load_builtin_operations(self):
        from .auth import AddAuthentication
        from .edit_ops import (
            AddCallback,
            AddImport,
            AddMemo,
            AddReducer,
            AddRef,
            AddState,
            AddUseEffect,
            InsertJSX,
            ModifyClassName,
            ModifyProp,
            WrapElement,
        )
        from .originate_ops import AddContextProvider, AddZustandStore, ExtractComponent

        for operation in (
            WrapElement(),
            AddState(),
            AddImport(),
            ModifyClassName(),
            InsertJSX(),
            AddUseEffect(),
            ModifyProp(),
            AddAuthentication(),
            AddRef(),
            AddMemo(),
            AddCallback(),
            AddReducer(),
        ):
            self.register_edit(operation)

        self.register_originate(AddContextProvider())
        self.register_originate(AddZustandStore())
        self.register_originate(ExtractComponent())
