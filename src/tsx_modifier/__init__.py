"""
tsx_modifier - batched, position-anchored edits of JSX/TSX sources

Edits are computed against one parse, applied in a single pass and the
result is re-parsed; output with syntax errors is never returned.
"""

from .engine import ASTModifier, modify_code
from .errors import InvalidOperationError, ModificationConflictError, ModifierError, NodeNotFoundError
from .models import (
    CallbackSpec,
    ClassNameSpec,
    ClassNameTemplate,
    ConditionalKind,
    ConditionalSpec,
    FunctionSpec,
    GenerateResult,
    ImportSpec,
    InsertJSXSpec,
    InsertPosition,
    MemoSpec,
    Modification,
    ModificationKind,
    ModifierConfig,
    Priority,
    PropAction,
    PropSpec,
    ReducerAction,
    ReducerSpec,
    RefSpec,
    StateVariableSpec,
    UseEffectSpec,
    WrapperSpec,
)
from .validator import SyntaxValidator, ValidationResult

__all__ = [
    "ASTModifier",
    "CallbackSpec",
    "ClassNameSpec",
    "ClassNameTemplate",
    "ConditionalKind",
    "ConditionalSpec",
    "FunctionSpec",
    "GenerateResult",
    "ImportSpec",
    "InsertJSXSpec",
    "InsertPosition",
    "InvalidOperationError",
    "MemoSpec",
    "Modification",
    "ModificationConflictError",
    "ModificationKind",
    "ModifierConfig",
    "ModifierError",
    "NodeNotFoundError",
    "Priority",
    "PropAction",
    "PropSpec",
    "ReducerAction",
    "ReducerSpec",
    "RefSpec",
    "StateVariableSpec",
    "SyntaxValidator",
    "UseEffectSpec",
    "ValidationResult",
    "WrapperSpec",
    "modify_code",
]
