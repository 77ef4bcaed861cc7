from dataclasses import dataclass, field
from typing import List, Optional

from tsx_tree_sitter import ErrorInfo, TSXParser


@dataclass
class ValidationResult:
    valid: bool
    errors: List[ErrorInfo] = field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        return [str(e) for e in self.errors]


class SyntaxValidator:
    """Re-parses generated code and reports every ERROR or MISSING node"""

    def __init__(self, parser: Optional[TSXParser] = None):
        self.parser = parser or TSXParser()

    def validate(self, code: str) -> ValidationResult:
        result = self.parser.parse_string(code)
        if not result.has_error:
            return ValidationResult(valid=True)

        errors = result.errors or [
            ErrorInfo(line=1, column=1, node_type="ERROR", text="unlocated syntax error")
        ]
        return ValidationResult(valid=False, errors=errors)
