"""Runs operation requests against source text.

``OperationExecutor`` is the composition root: it loads the grammar once
and hands that ``Language`` to a fresh parser and modifier for every
operation, so no tree or queue outlives the call that created it.
"""

import logging
from functools import lru_cache
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError
from tree_sitter import Language

from tsx_modifier import ASTModifier, ModifierConfig, ModifierError, SyntaxValidator
from tsx_tree_sitter import Dialect, SourceParser, TSXParser, load_language

from .errors import CompositeOperationError, UnknownOperationError
from .models import ExecutionResult, operation_adapter
from .registry import OperationRegistry

logger = logging.getLogger(__name__)

OperationInput = Union[BaseModel, Mapping[str, Any]]


def operation_type_of(operation: Any) -> Any:
    if isinstance(operation, Mapping):
        return operation.get("type")
    return getattr(operation, "type", None)


def is_ast_operation(operation: Any) -> bool:
    """Whether ``operation`` looks like an AST operation request"""
    op_type = operation_type_of(operation)
    return isinstance(op_type, str) and op_type.startswith("AST_")


def _format_validation_error(error: ValidationError) -> List[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "operation"
        messages.append(f"{location}: {item['msg']}")
    return messages


class OperationExecutor:
    """Executes single operations or strictly sequential operation lists"""

    def __init__(self, config: Optional[ModifierConfig] = None, dialect: Union[Dialect, str] = Dialect.TSX,
                 language: Optional[Language] = None, registry: Optional[OperationRegistry] = None):
        self.config = config or ModifierConfig()
        self.language = language if language is not None else load_language(dialect)
        self.registry = registry or OperationRegistry()

    def _new_parser(self) -> SourceParser:
        return SourceParser(TSXParser(language=self.language))

    def parse_operation(self, operation: OperationInput) -> BaseModel:
        op_type = operation_type_of(operation)
        if not self.registry.is_registered(op_type):
            raise UnknownOperationError(op_type)
        if isinstance(operation, BaseModel):
            return operation
        return operation_adapter.validate_python(operation)

    def execute_operation(self, code: str, operation: OperationInput) -> ExecutionResult:
        try:
            op = self.parse_operation(operation)
        except UnknownOperationError as e:
            return ExecutionResult(success=False, errors=[str(e)])
        except ValidationError as e:
            op_type = operation_type_of(operation)
            return ExecutionResult(success=False, errors=[f"Invalid {op_type} operation", *_format_validation_error(e)])

        logger.debug("Executing %s", op.type)
        try:
            edit = self.registry.get_edit(op.type)
            if edit is not None:
                return self._execute_edit(code, edit, op)
            return self._execute_originate(self.registry.get_originate(op.type), op)
        except CompositeOperationError as e:
            return ExecutionResult(success=False, errors=e.errors)
        except ModifierError as e:
            return ExecutionResult(success=False, errors=[str(e)])
        except ValueError as e:
            return ExecutionResult(success=False, errors=["AST operation failed", str(e)])

    def _execute_edit(self, code: str, edit, op: BaseModel) -> ExecutionResult:
        modifier = ASTModifier(code, parser=self._new_parser(), config=self.config)
        description = edit.apply(modifier, op)
        result = modifier.generate()
        if not result.success:
            return ExecutionResult(success=False, errors=result.errors)
        logger.debug("%s", description)
        return ExecutionResult(success=True, code=result.code, operation=description)

    def _execute_originate(self, originate, op: BaseModel) -> ExecutionResult:
        parser = TSXParser(language=self.language)
        code, description = originate.originate(op, self.config, parser)
        validation = SyntaxValidator(parser).validate(code)
        if not validation.valid:
            return ExecutionResult(success=False, errors=validation.messages)
        logger.debug("%s", description)
        return ExecutionResult(success=True, code=code, operation=description)

    def execute_operations(self, code: str, operations: Iterable[OperationInput]) -> ExecutionResult:
        """Apply operations in order, each on the previous one's output.

        Stops at the first failure; nothing from earlier operations is returned.
        """
        current = code
        applied: List[str] = []
        for operation in operations:
            result = self.execute_operation(current, operation)
            if not result.success:
                return ExecutionResult(
                    success=False,
                    errors=[f"Failed after {len(applied)} operations", *(result.errors or [])],
                )
            current = result.code
            if result.operation:
                applied.append(result.operation)
        return ExecutionResult(success=True, code=current, operation="; ".join(applied))


@lru_cache(maxsize=1)
def get_executor() -> OperationExecutor:
    """Process-wide executor with default settings"""
    return OperationExecutor()


def execute_ast_operation(code: str, operation: OperationInput) -> ExecutionResult:
    return get_executor().execute_operation(code, operation)


def execute_ast_operations(code: str, operations: Iterable[OperationInput]) -> ExecutionResult:
    return get_executor().execute_operations(code, operations)
