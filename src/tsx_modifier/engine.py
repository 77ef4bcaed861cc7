"""Position-anchored editing of JSX/TSX sources.

An ``ASTModifier`` parses its source once, collects ``Modification`` records
computed against that single parse and applies all of them in one splice
over the original bytes. Offsets never shift while modifications are being
queued, so the order in which callers enqueue them does not matter beyond
breaking ties between edits anchored at the same offset.
"""

import logging
from typing import Callable, Dict, List, Optional

from tree_sitter import Node

from tsx_tree_sitter import (
    HOOK_RANKS,
    ASTWalker,
    FunctionMatch,
    ImportInfo,
    JSXPatterns,
    NodeKind,
    SourceParser,
)

from . import snippets
from .errors import InvalidOperationError, ModificationConflictError, ModifierError, NodeNotFoundError
from .models import (
    CLOSING_PRIORITIES,
    CallbackSpec,
    ClassNameSpec,
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
    ReducerSpec,
    RefSpec,
    StateVariableSpec,
    UseEffectSpec,
    WrapperSpec,
)
from .validator import SyntaxValidator

logger = logging.getLogger(__name__)

# Expressions that can take a prefix like ``cond && `` without parentheses
_TIGHT_EXPRESSION_KINDS = frozenset(
    {
        NodeKind.PARENTHESIZED_EXPRESSION,
        NodeKind.JSX_ELEMENT,
        NodeKind.JSX_SELF_CLOSING_ELEMENT,
        NodeKind.JSX_FRAGMENT,
        NodeKind.IDENTIFIER,
        NodeKind.CALL_EXPRESSION,
        NodeKind.MEMBER_EXPRESSION,
        NodeKind.STRING,
        NodeKind.TEMPLATE_STRING,
    }
)


class ASTModifier:
    """Queues structural edits against one parse of ``source``"""

    def __init__(self, source: str, parser: Optional[SourceParser] = None,
                 config: Optional[ModifierConfig] = None):
        self.config = config or ModifierConfig()
        self.parser = parser or SourceParser()
        self.source_text = source
        self.source = source.encode("utf-8")
        self.tree = self.parser.parse(self.source)
        self.validator = SyntaxValidator(self.parser.parser)
        self._modifications: List[Modification] = []
        self._pending_imports: Dict[str, ImportSpec] = {}

    @property
    def modifications(self) -> List[Modification]:
        return list(self._modifications)

    # Low-level API

    def add_modification(self, modification: Modification) -> None:
        if modification.end > len(self.source):
            raise InvalidOperationError(
                f"Range [{modification.start}, {modification.end}) is outside a "
                f"{len(self.source)}-byte source"
            )
        logger.debug("Queued %s at [%d, %d): %s", modification.kind.value, modification.start,
                     modification.end, modification.description)
        self._modifications.append(modification)

    def insert_at(self, position: int, text: str, priority: int = Priority.ATTRIBUTE,
                  description: str = "") -> None:
        self.add_modification(Modification.insert(position, text, priority, description))

    def replace_range(self, start: int, end: int, text: str, priority: int = Priority.ATTRIBUTE,
                      description: str = "") -> None:
        self.add_modification(Modification.replace(start, end, text, priority, description))

    # Source helpers

    def _text(self, node: Node) -> str:
        return ASTWalker.get_text(node, self.source)

    def _line_indent(self, offset: int) -> str:
        """Leading whitespace of the line containing ``offset``"""
        line_start = self.source.rfind(b"\n", 0, offset) + 1
        end = line_start
        while end < len(self.source) and self.source[end:end + 1] in (b" ", b"\t"):
            end += 1
        return self.source[line_start:end].decode("utf-8")

    def _is_line_start(self, offset: int) -> bool:
        """Only whitespace precedes ``offset`` on its line"""
        line_start = self.source.rfind(b"\n", 0, offset) + 1
        return not self.source[line_start:offset].strip()

    def _statement_end(self, node: Node) -> int:
        """End of ``node``, moved past a trailing line comment on the same line"""
        line_end = self.source.find(b"\n", node.end_byte)
        if line_end == -1:
            line_end = len(self.source)
        rest = self.source[node.end_byte:line_end].strip()
        if not rest or rest.startswith(b"//"):
            return line_end - 1 if self.source[line_end - 1:line_end] == b"\r" else line_end
        return node.end_byte

    def _resolve_function(self, target_function: Optional[str]) -> FunctionMatch:
        match = self.parser.find_component_function(self.tree, target_function)
        if match is None:
            raise NodeNotFoundError("component function", target_function or "default export")
        return match

    def _require_block_body(self, match: FunctionMatch) -> Node:
        body = match.body
        if NodeKind.of(body) is not NodeKind.STATEMENT_BLOCK:
            raise InvalidOperationError(
                f"Function '{match.name or 'anonymous'}' has an expression body; "
                "it needs a block body to take statements"
            )
        return body

    def _body_indent(self, body: Node) -> str:
        statements = JSXPatterns.statements(body)
        if statements and statements[0].start_point[0] != body.start_point[0]:
            return self._line_indent(statements[0].start_byte)
        return self._line_indent(body.start_byte) + self.config.indent_unit

    def _require_jsx(self, node: Node, action: str) -> None:
        if not JSXPatterns.is_jsx(node):
            raise InvalidOperationError(f"Cannot {action} a '{node.type}' node; a JSX element is required")

    # Imports

    def add_import(self, spec: ImportSpec) -> None:
        """Queue an import; merged per module and resolved at ``generate()``"""
        pending = self._pending_imports.get(spec.source)
        self._pending_imports[spec.source] = pending.merge(spec) if pending else spec

    def _ensure_react_import(self, hook: str) -> None:
        self.add_import(ImportSpec(source="react", named_imports=[hook]))

    def _flush_imports(self) -> None:
        if not self._pending_imports:
            return
        existing = [self.parser.get_import_info(n) for n in self.parser.find_imports(self.tree)]

        new_specs = []
        for spec in self._pending_imports.values():
            target = next(
                (info for info in existing if info.source == spec.source and not info.is_type_only), None
            )
            leftover = spec if target is None else self._merge_into(target, spec)
            if leftover is not None and not leftover.is_empty:
                new_specs.append(leftover)
        self._pending_imports = {}

        if new_specs:
            self._insert_import_statements(new_specs, existing)

    def _merge_into(self, info: ImportInfo, spec: ImportSpec) -> Optional[ImportSpec]:
        """Extend an existing import statement; returns what could not be merged"""
        clause = ASTWalker.get_child_of_type(info.node, "import_clause")
        if clause is None:
            return spec

        leftover = ImportSpec(source=spec.source)
        description = f"Merge import from {spec.source}"
        named_node = ASTWalker.get_child_of_type(clause, "named_imports")
        namespace_node = ASTWalker.get_child_of_type(clause, "namespace_import")

        if spec.default_import and spec.default_import != info.default_import:
            if info.default_import is None:
                self.insert_at(clause.start_byte, f"{spec.default_import}, ", Priority.IMPORT, description)
            else:
                leftover.default_import = spec.default_import

        existing_names = {name.split(" as ")[0].strip() for name in info.named_imports}
        missing = [name for name in spec.named_imports if name.split(" as ")[0].strip() not in existing_names]
        if missing:
            names = ", ".join(missing)
            if named_node is not None:
                specifiers = ASTWalker.get_children_of_type(named_node, "import_specifier")
                if specifiers:
                    self.insert_at(specifiers[-1].end_byte, f", {names}", Priority.IMPORT, description)
                else:
                    self.insert_at(named_node.start_byte + 1, f" {names} ", Priority.IMPORT, description)
            elif namespace_node is not None:
                leftover.named_imports = missing
            else:
                self.insert_at(clause.end_byte, f", {{ {names} }}", Priority.IMPORT, description)

        if spec.namespace_import and spec.namespace_import != info.namespace_import:
            leftover.namespace_import = spec.namespace_import
        return leftover

    def _insert_import_statements(self, specs: List[ImportSpec], existing: List[ImportInfo]) -> None:
        statements = [s for spec in specs for s in snippets.import_statements(spec, self.config)]
        description = "Add import from " + ", ".join(spec.source for spec in specs)

        if existing:
            anchor = max(existing, key=lambda info: info.node.end_byte).node
            self.insert_at(self._statement_end(anchor), "".join("\n" + s for s in statements), Priority.IMPORT,
                           description)
            return

        directives = []
        for statement in JSXPatterns.statements(self.tree.root_node):
            if not JSXPatterns.is_directive(statement):
                break
            directives.append(statement)
        if directives:
            self.insert_at(self._statement_end(directives[-1]), "\n\n" + "\n".join(statements),
                           Priority.IMPORT, description)
        else:
            separator = "\n" if self.source.startswith(b"\n") else "\n\n"
            self.insert_at(0, "\n".join(statements) + separator, Priority.IMPORT, description)

    # Hooks and function-body statements

    def _hook_anchor(self, body: Node, hook: str) -> Optional[Node]:
        """Last statement of the leading hook run ranked at or before ``hook``"""
        rank = HOOK_RANKS[hook]
        anchor = None
        for statement in JSXPatterns.statements(body):
            name = JSXPatterns.hook_name_of_statement(statement)
            if name not in HOOK_RANKS or HOOK_RANKS[name] > rank:
                break
            anchor = statement
        return anchor

    def _insert_hook(self, match: FunctionMatch, statement: str, hook: str, priority: Priority,
                     description: str) -> None:
        body = self._require_block_body(match)
        indent = self._body_indent(body)
        anchor = None if hook == "useState" else self._hook_anchor(body, hook)
        position = body.start_byte + 1 if anchor is None else anchor.end_byte
        self.insert_at(position, "\n" + indent + snippets.indent_block(statement, indent), priority, description)
        self._ensure_react_import(hook)

    def _insert_before_return(self, match: FunctionMatch, statement: str, priority: Priority,
                              description: str) -> None:
        body = self._require_block_body(match)
        returns = self.parser.find_return_statement(match.node)

        if returns is not None and self._is_line_start(returns.start_byte):
            indent = self._line_indent(returns.start_byte)
            text = snippets.indent_block(statement, indent) + "\n" + indent
            self.insert_at(returns.start_byte, text, priority, description)
            return

        indent = self._body_indent(body)
        text = "\n" + indent + snippets.indent_block(statement, indent)
        if returns is not None:
            self.insert_at(returns.start_byte, text + "\n" + indent, priority, description)
            return

        statements = JSXPatterns.statements(body)
        if statements:
            self.insert_at(statements[-1].end_byte, text, priority, description)
        else:
            closing = "\n" + self._line_indent(body.start_byte)
            self.insert_at(body.start_byte + 1, text + closing, priority, description)

    def add_state_variable(self, spec: StateVariableSpec, target_function: Optional[str] = None) -> None:
        match = self._resolve_function(target_function)
        self._insert_hook(match, snippets.state_declaration(spec), "useState", Priority.STATE,
                          f"Add state variable {spec.name}")

    def add_ref(self, spec: RefSpec, target_function: Optional[str] = None) -> None:
        match = self._resolve_function(target_function)
        self._insert_hook(match, snippets.ref_declaration(spec), "useRef", Priority.REF, f"Add ref {spec.name}")

    def add_memo(self, spec: MemoSpec, target_function: Optional[str] = None) -> None:
        match = self._resolve_function(target_function)
        self._insert_hook(match, snippets.memo_declaration(spec, self.config), "useMemo", Priority.MEMO,
                          f"Add memoized value {spec.name}")

    def add_callback(self, spec: CallbackSpec, target_function: Optional[str] = None) -> None:
        match = self._resolve_function(target_function)
        self._insert_hook(match, snippets.callback_declaration(spec, self.config), "useCallback",
                          Priority.CALLBACK, f"Add callback {spec.name}")

    def add_reducer(self, spec: ReducerSpec, target_function: Optional[str] = None) -> None:
        match = self._resolve_function(target_function)
        self._insert_hook(match, snippets.reducer_declaration(spec), "useReducer", Priority.REDUCER,
                          f"Add reducer {spec.name}")

        if self.parser.find_function_by_name(self.tree, spec.reducer_name) is not None:
            logger.debug("Reducer function %s already defined", spec.reducer_name)
            return
        top = JSXPatterns.top_level_statement(match.node)
        self.insert_at(top.start_byte, snippets.reducer_function(spec, self.config) + "\n\n",
                       Priority.REDUCER, f"Add reducer function {spec.reducer_name}")

    def add_use_effect(self, spec: UseEffectSpec, target_function: Optional[str] = None) -> None:
        match = self._resolve_function(target_function)
        self._insert_before_return(match, snippets.effect_call(spec, self.config), Priority.EFFECT,
                                   "Add useEffect")
        self._ensure_react_import("useEffect")

    def add_function(self, spec: FunctionSpec, target_function: Optional[str] = None) -> None:
        match = self._resolve_function(target_function)
        self._insert_before_return(match, snippets.function_definition(spec, self.config), Priority.FUNCTION,
                                   f"Add function {spec.name}")

    # JSX

    def wrap_element(self, node: Node, spec: WrapperSpec) -> None:
        self._require_jsx(node, "wrap")
        description = f"Wrap in {spec.component}"
        self.insert_at(node.start_byte, snippets.open_tag(spec.component, spec.props), Priority.WRAP_OPEN,
                       description)
        self.insert_at(node.end_byte, snippets.close_tag(spec.component), Priority.WRAP_CLOSE, description)
        if spec.import_spec is not None:
            self.add_import(spec.import_spec)

    def _attribute_anchor(self, node: Node) -> int:
        """Offset after which a new attribute can be written"""
        name_node = JSXPatterns.get_tag_name_node(node)
        if name_node is None:
            raise InvalidOperationError("Fragments cannot take attributes")
        attributes = JSXPatterns.get_jsx_attributes(node)
        return attributes[-1].end_byte if attributes else name_node.end_byte

    def modify_class_name(self, node: Node, spec: ClassNameSpec) -> None:
        self._require_jsx(node, "set className on")
        attribute = JSXPatterns.find_jsx_attribute(node, "className")

        classes: List[str] = []
        dynamic: List[str] = []
        if attribute is not None:
            value = JSXPatterns.get_attribute_value(attribute)
            if NodeKind.of(value) is NodeKind.JSX_EXPRESSION:
                value = JSXPatterns.first_named_child(value)
            if NodeKind.of(value) is NodeKind.STRING:
                classes.extend(JSXPatterns.get_string_value(value).split())
            elif value is not None:
                dynamic.append("${" + self._text(value) + "}")

        classes = list(dict.fromkeys(classes + [c for cls in spec.static_classes for c in cls.split()]))
        if spec.template is not None:
            dynamic.append(snippets.class_template_part(spec.template, self.config))
        if spec.raw_template:
            dynamic.append(spec.raw_template.strip().strip("`"))

        if dynamic:
            rendered = "className={`" + " ".join(classes + dynamic) + "`}"
        else:
            rendered = 'className="' + " ".join(classes) + '"'

        if attribute is not None:
            self.replace_range(attribute.start_byte, attribute.end_byte, rendered, Priority.ATTRIBUTE,
                               "Update className")
        else:
            self.insert_at(self._attribute_anchor(node), " " + rendered, Priority.ATTRIBUTE, "Add className")

    def _child_indent(self, node: Node) -> str:
        for child in node.named_children:
            if NodeKind.of(child) in (NodeKind.JSX_OPENING_ELEMENT, NodeKind.JSX_CLOSING_ELEMENT,
                                      NodeKind.JSX_TEXT):
                continue
            if self._is_line_start(child.start_byte):
                return self._line_indent(child.start_byte)
        return self._line_indent(node.start_byte) + self.config.indent_unit

    def insert_jsx(self, node: Node, spec: InsertJSXSpec) -> None:
        self._require_jsx(node, "insert next to")
        position = InsertPosition(spec.position)
        description = f"Insert JSX {position.value}"
        jsx = spec.jsx.strip()

        if position in (InsertPosition.BEFORE, InsertPosition.AFTER):
            indent = self._line_indent(node.start_byte)
            content = snippets.indent_block(jsx, indent)
            if not JSXPatterns.has_jsx_parent(node):
                # A lone JSX root cannot take siblings; wrap both in a fragment
                if position is InsertPosition.BEFORE:
                    self.insert_at(node.start_byte, f"<>\n{indent}{content}\n{indent}", Priority.WRAP_OPEN,
                                   description)
                    self.insert_at(node.end_byte, f"\n{indent}</>", Priority.WRAP_CLOSE, description)
                else:
                    self.insert_at(node.start_byte, f"<>\n{indent}", Priority.WRAP_OPEN, description)
                    self.insert_at(node.end_byte, f"\n{indent}{content}\n{indent}</>", Priority.WRAP_CLOSE,
                                   description)
                return
            separator = f"\n{indent}" if self._is_line_start(node.start_byte) else ""
            if position is InsertPosition.BEFORE:
                self.insert_at(node.start_byte, content + separator, Priority.JSX, description)
            else:
                self.insert_at(node.end_byte, separator + content, Priority.JSX, description)
            return

        if NodeKind.of(node) is NodeKind.JSX_SELF_CLOSING_ELEMENT:
            named = [c for c in node.named_children if NodeKind.of(c) is not NodeKind.COMMENT]
            name = JSXPatterns.get_jsx_tag_name(node)
            self.replace_range(named[-1].end_byte, node.end_byte, f">{jsx}</{name}>", Priority.JSX,
                               f"{description} of self-closing {name}")
            return

        opening = JSXPatterns.get_opening_element(node)
        closing = JSXPatterns.get_closing_element(node)
        if opening is None or closing is None:
            raise InvalidOperationError("JSX element has no opening or closing tag")

        multiline = closing.start_point[0] != opening.end_point[0]
        child_indent = self._child_indent(node)
        content = snippets.indent_block(jsx, child_indent)
        if position is InsertPosition.INSIDE_START:
            text = f"\n{child_indent}{content}" if multiline else jsx
            self.insert_at(opening.end_byte, text, Priority.JSX, description)
        elif multiline and self._is_line_start(closing.start_byte):
            line_start = self.source.rfind(b"\n", 0, closing.start_byte) + 1
            self.insert_at(line_start, f"{child_indent}{content}\n", Priority.JSX, description)
        else:
            self.insert_at(closing.start_byte, jsx, Priority.JSX, description)

    def modify_prop(self, node: Node, spec: PropSpec) -> None:
        self._require_jsx(node, "modify props of")
        action = PropAction(spec.action)
        attribute = JSXPatterns.find_jsx_attribute(node, spec.name)

        if action is PropAction.REMOVE:
            if attribute is None:
                logger.debug("Prop %s not present; nothing to remove", spec.name)
                return
            start = attribute.start_byte
            while start > 0 and self.source[start - 1:start] in (b" ", b"\t", b"\n", b"\r"):
                start -= 1
            self.replace_range(start, attribute.end_byte, "", Priority.ATTRIBUTE, f"Remove prop {spec.name}")
            return

        rendered = snippets.render_attribute(spec.name, spec.value)
        if attribute is not None:
            self.replace_range(attribute.start_byte, attribute.end_byte, rendered, Priority.ATTRIBUTE,
                               f"Update prop {spec.name}")
        else:
            self.insert_at(self._attribute_anchor(node), " " + rendered, Priority.ATTRIBUTE,
                           f"Add prop {spec.name}")

    def wrap_in_conditional(self, spec: ConditionalSpec, target_function: Optional[str] = None) -> None:
        """Guard what the component renders behind ``spec.condition``"""
        match = self._resolve_function(target_function)
        kind = ConditionalKind(spec.kind)
        unit = self.config.indent_unit

        returns = None
        if NodeKind.of(match.body) is NodeKind.STATEMENT_BLOCK:
            returns = self.parser.find_return_statement(match.node)
            if returns is None:
                raise NodeNotFoundError("return statement in", match.name or "component")
            expression = JSXPatterns.first_named_child(returns)
            if expression is None:
                raise NodeNotFoundError("returned value in", match.name or "component")
            indent = self._line_indent(returns.start_byte)
        else:
            expression = match.body
            indent = self._line_indent(expression.start_byte)

        def fallback_at(level: str) -> str:
            if not spec.fallback:
                return "null"
            content = snippets.indent_block(spec.fallback.strip(), level + unit)
            return f"(\n{level}{unit}{content}\n{level})"

        if kind is ConditionalKind.IF_RETURN:
            if returns is None:
                raise InvalidOperationError("An early return needs a function with a block body")
            condition = spec.condition.strip()
            negated = f"!{condition}" if condition.isidentifier() else f"!({condition})"
            inner = indent + unit
            guard = f"if ({negated}) {{\n{inner}return {fallback_at(inner)};\n{indent}}}\n{indent}"
            self.insert_at(returns.start_byte, guard, Priority.CONDITIONAL_GUARD, "Add early return")
            return

        tight = NodeKind.of(expression) in _TIGHT_EXPRESSION_KINDS
        opener, closer = ("", "") if tight else ("(", ")")
        if kind is ConditionalKind.AND:
            self.insert_at(expression.start_byte, f"{spec.condition} && {opener}", Priority.CONDITIONAL_OPEN,
                           "Add && guard")
            if closer:
                self.insert_at(expression.end_byte, closer, Priority.CONDITIONAL_CLOSE, "Add && guard")
        else:
            self.insert_at(expression.start_byte, f"{spec.condition} ? {opener}", Priority.CONDITIONAL_OPEN,
                           "Add ternary")
            self.insert_at(expression.end_byte, f"{closer} : {fallback_at(indent)}",
                           Priority.CONDITIONAL_CLOSE, "Add ternary")

    # Output

    def _ordered_modifications(self) -> List[Modification]:
        """Sort by offset then priority, rejecting overlaps.

        Inserts may share a boundary with a replacement and go ahead of one
        starting at the same offset; anything starting inside an earlier
        replacement is a conflict. Closers sharing an
        offset and a priority unwind in reverse queue order so that nested
        wrappers stay balanced.
        """

        def key(item):
            index, m = item
            order = -index if m.priority in CLOSING_PRIORITIES else index
            return m.start, m.kind is not ModificationKind.INSERT, m.priority, order

        ordered = [m for _, m in sorted(enumerate(self._modifications), key=key)]
        cursor = 0
        previous = None
        for modification in ordered:
            if modification.start < cursor:
                raise ModificationConflictError(
                    f"Modification '{modification.description}' at [{modification.start}, {modification.end}) "
                    f"overlaps '{previous.description}' at [{previous.start}, {previous.end})"
                )
            if modification.end >= cursor:
                cursor = modification.end
                previous = modification
        return ordered

    @staticmethod
    def _apply_modifications(source: bytes, modifications: List[Modification]) -> bytes:
        """Splice pre-sorted, non-overlapping modifications in a single pass"""
        result = []
        last_offset = 0
        for m in modifications:
            result.append(source[last_offset:m.start])
            result.append(m.new_text.encode("utf-8"))
            last_offset = m.end
        result.append(source[last_offset:])
        return b"".join(result)

    def generate(self) -> GenerateResult:
        """Apply every queued modification and validate the result"""
        self._flush_imports()
        if not self._modifications:
            return GenerateResult(success=True, code=self.source_text)

        try:
            ordered = self._ordered_modifications()
        except ModificationConflictError as e:
            logger.debug("Rejected modifications: %s", e)
            return GenerateResult(success=False, errors=[str(e)])

        try:
            code = self._apply_modifications(self.source, ordered).decode("utf-8")
        except UnicodeDecodeError as e:
            return GenerateResult(success=False, errors=[f"Modification split a character: {e}"])

        validation = self.validator.validate(code)
        if not validation.valid:
            logger.debug("Generated code has %d syntax errors", len(validation.errors))
            return GenerateResult(success=False, errors=validation.messages)
        return GenerateResult(success=True, code=code)


def modify_code(source: str, callback: Callable[[ASTModifier], None],
                parser: Optional[SourceParser] = None,
                config: Optional[ModifierConfig] = None) -> GenerateResult:
    """Build a modifier for ``source``, let ``callback`` queue edits, then generate"""
    modifier = ASTModifier(source, parser=parser, config=config)
    try:
        callback(modifier)
    except ModifierError as e:
        return GenerateResult(success=False, errors=[str(e)])
    return modifier.generate()
