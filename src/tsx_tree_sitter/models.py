from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from tree_sitter import Node


class FunctionKind(str, Enum):
    DECLARATION = "declaration"
    ARROW = "arrow"
    EXPRESSION = "expression"


class VariableKind(str, Enum):
    SIMPLE = "simple"
    ARRAY_DESTRUCTURE = "array_destructure"
    OBJECT_DESTRUCTURE = "object_destructure"
    OBJECT_DESTRUCTURE_RENAMED = "object_destructure_renamed"


@dataclass
class ErrorInfo:
    """An ERROR or MISSING node found in a syntax tree"""

    line: int
    column: int
    node_type: str
    text: str = ""

    def __str__(self) -> str:
        message = f"Syntax error at line {self.line}, column {self.column}: {self.node_type}"
        if self.text:
            message += f" near '{self.text}'"
        return message


@dataclass
class FunctionMatch:
    """A function found by name, in any of its three surface shapes.

    ``declarator_node`` is only set for arrow functions and function
    expressions bound through ``const name = ...``.
    """

    kind: FunctionKind
    node: Node
    name: Optional[str] = None
    declarator_node: Optional[Node] = None

    @property
    def body(self) -> Optional[Node]:
        return self.node.child_by_field_name("body")


@dataclass
class VariableMatch:
    """A binding found by name in a variable declarator"""

    kind: VariableKind
    node: Node
    name_node: Node
    original_name: Optional[str] = None


@dataclass
class StateVariable:
    """A ``const [x, setX] = useState(...)`` declaration"""

    state_var: str
    setter_var: str
    node: Node
    initial_value: Optional[str] = None


@dataclass
class ImportInfo:
    """Decoded view of an import statement"""

    source: str
    node: Node
    default_import: Optional[str] = None
    named_imports: List[str] = field(default_factory=list)
    namespace_import: Optional[str] = None
    is_type_only: bool = False
