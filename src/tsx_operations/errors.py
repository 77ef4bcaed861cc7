from typing import List

from tsx_modifier import ModifierError


class UnknownOperationError(Exception):
    def __init__(self, operation_type: object):
        self.operation_type = operation_type
        super().__init__(f"Unknown AST operation type: {operation_type}")


class CompositeOperationError(ModifierError):
    """A step of a multi-step operation failed; nothing from earlier steps is kept"""

    def __init__(self, operation: str, step: int, completed: int, cause: Exception):
        self.operation = operation
        self.step = step
        self.completed = completed
        self.cause = cause
        super().__init__(f"{operation} failed at step {step} ({completed} steps completed)")

    @property
    def errors(self) -> List[str]:
        return [str(self), str(self.cause)]
