from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Optional


class ModificationKind(str, Enum):
    INSERT = "insert"
    REPLACE = "replace"


class Priority(IntEnum):
    """Tie-breaker for modifications anchored at the same byte offset (lower applies first).

    At one offset, whatever closes the node ending there comes first, plain
    inserts follow, and whatever opens the node starting there comes last.
    """

    WRAP_CLOSE = 0
    CONDITIONAL_CLOSE = 5
    IMPORT = 10
    STATE = 20
    REDUCER = 25
    REF = 30
    MEMO = 40
    CALLBACK = 50
    FUNCTION = 60
    EFFECT = 70
    CONDITIONAL_GUARD = 75
    JSX = 80
    ATTRIBUTE = 90
    CONDITIONAL_OPEN = 100
    WRAP_OPEN = 110


CLOSING_PRIORITIES = frozenset({Priority.WRAP_CLOSE, Priority.CONDITIONAL_CLOSE})


@dataclass(frozen=True)
class Modification:
    """A single edit against the original source bytes"""

    kind: ModificationKind
    start: int
    end: int
    new_text: str
    priority: int = Priority.ATTRIBUTE
    description: str = ""

    def __post_init__(self):
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"Invalid range [{self.start}, {self.end}) for '{self.description}'")
        if self.kind is ModificationKind.INSERT and self.start != self.end:
            raise ValueError(f"Insert '{self.description}' must have an empty range")

    @classmethod
    def insert(cls, position: int, text: str, priority: int = Priority.ATTRIBUTE, description: str = ""):
        return cls(ModificationKind.INSERT, position, position, text, priority, description)

    @classmethod
    def replace(cls, start: int, end: int, text: str, priority: int = Priority.ATTRIBUTE, description: str = ""):
        return cls(ModificationKind.REPLACE, start, end, text, priority, description)


@dataclass
class ModifierConfig:
    indent_size: int = 2
    quote_style: str = "single"

    @property
    def indent_unit(self) -> str:
        return " " * self.indent_size

    def quote(self, value: str) -> str:
        q = '"' if self.quote_style == "double" else "'"
        return q + value.replace("\\", "\\\\").replace(q, "\\" + q) + q


@dataclass
class ImportSpec:
    """An import to add. Named imports are deduplicated, first occurrence kept."""

    source: str
    default_import: Optional[str] = None
    named_imports: List[str] = field(default_factory=list)
    namespace_import: Optional[str] = None

    def __post_init__(self):
        self.named_imports = list(dict.fromkeys(n.strip() for n in self.named_imports if n.strip()))

    def merge(self, other: "ImportSpec") -> "ImportSpec":
        """Union of two specs for the same module; existing names win"""
        return ImportSpec(
            source=self.source,
            default_import=self.default_import or other.default_import,
            named_imports=self.named_imports + other.named_imports,
            namespace_import=self.namespace_import or other.namespace_import,
        )

    @property
    def is_empty(self) -> bool:
        return not (self.default_import or self.named_imports or self.namespace_import)


@dataclass
class WrapperSpec:
    component: str
    props: Optional[Dict[str, Optional[str]]] = None
    import_spec: Optional[ImportSpec] = None


@dataclass
class StateVariableSpec:
    name: str
    setter: str
    initial_value: str = "null"
    type_annotation: Optional[str] = None


@dataclass
class ClassNameTemplate:
    variable: str
    true_value: str
    false_value: str = ""
    operator: str = "?"


@dataclass
class ClassNameSpec:
    static_classes: List[str] = field(default_factory=list)
    template: Optional[ClassNameTemplate] = None
    raw_template: Optional[str] = None


class InsertPosition(str, Enum):
    BEFORE = "before"
    AFTER = "after"
    INSIDE_START = "inside_start"
    INSIDE_END = "inside_end"


@dataclass
class InsertJSXSpec:
    jsx: str
    position: InsertPosition = InsertPosition.INSIDE_END


@dataclass
class UseEffectSpec:
    body: str
    dependencies: Optional[List[str]] = None
    cleanup: Optional[str] = None


class PropAction(str, Enum):
    ADD = "add"
    UPDATE = "update"
    REMOVE = "remove"


@dataclass
class PropSpec:
    name: str
    value: Optional[str] = None
    action: PropAction = PropAction.ADD


@dataclass
class RefSpec:
    name: str
    initial_value: str = "null"
    type_annotation: Optional[str] = None


@dataclass
class MemoSpec:
    name: str
    computation: str
    dependencies: List[str] = field(default_factory=list)


@dataclass
class CallbackSpec:
    name: str
    body: str
    params: List[str] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)


@dataclass
class ReducerAction:
    type: str
    handler: str


@dataclass
class ReducerSpec:
    name: str
    dispatch_name: str
    reducer_name: str
    initial_state: str
    actions: List[ReducerAction] = field(default_factory=list)


class ConditionalKind(str, Enum):
    TERNARY = "ternary"
    AND = "and"
    IF_RETURN = "if-return"


@dataclass
class ConditionalSpec:
    condition: str
    fallback: Optional[str] = None
    kind: ConditionalKind = ConditionalKind.TERNARY


@dataclass
class FunctionSpec:
    name: str
    body: str
    params: List[str] = field(default_factory=list)
    is_arrow: bool = True
    is_async: bool = False


@dataclass
class GenerateResult:
    success: bool
    code: Optional[str] = None
    errors: List[str] = field(default_factory=list)
