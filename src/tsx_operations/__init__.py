"""
tsx_operations - named, high-level JSX/TSX transformations

Edit operations queue changes on an existing file through one
``ASTModifier``; originate operations build a new file from a template.
"""

from .auth import LoginFormBuilder, SimpleLoginForm, StyledLoginForm, get_login_form_builder
from .errors import CompositeOperationError, UnknownOperationError
from .executor import (
    OperationExecutor,
    execute_ast_operation,
    execute_ast_operations,
    get_executor,
    is_ast_operation,
)
from .models import ASTOperation, ExecutionResult, operation_adapter
from .originate_ops import detect_props
from .registry import EditOperation, OperationRegistry, OriginateOperation

__all__ = [
    "ASTOperation",
    "CompositeOperationError",
    "EditOperation",
    "ExecutionResult",
    "LoginFormBuilder",
    "OperationExecutor",
    "OperationRegistry",
    "OriginateOperation",
    "SimpleLoginForm",
    "StyledLoginForm",
    "UnknownOperationError",
    "detect_props",
    "execute_ast_operation",
    "execute_ast_operations",
    "get_executor",
    "get_login_form_builder",
    "is_ast_operation",
    "operation_adapter",
]
