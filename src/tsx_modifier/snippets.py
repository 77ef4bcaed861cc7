"""Source text builders for the statements and tags the modifier inserts.

Every builder returns text rooted at column zero; the engine re-indents it
for the place it lands in.
"""

import textwrap
from typing import Dict, List, Optional

from .models import (
    CallbackSpec,
    ClassNameTemplate,
    FunctionSpec,
    ImportSpec,
    MemoSpec,
    ModifierConfig,
    ReducerSpec,
    RefSpec,
    StateVariableSpec,
    UseEffectSpec,
)


def normalize_body(body: str) -> List[str]:
    """Split a code fragment into lines with the common indentation removed.

    The first line is stripped on its own since callers usually pass it
    without the indentation the following lines carry.
    """
    lines = body.strip("\n").splitlines()
    if not lines:
        return []
    first = lines[0].strip()
    rest = textwrap.dedent("\n".join(lines[1:])).splitlines() if len(lines) > 1 else []
    return [first] + [line.rstrip() for line in rest]


def block(body: str, unit: str) -> str:
    """Body lines indented by one ``unit``, blank lines kept empty"""
    return "\n".join(unit + line if line.strip() else "" for line in normalize_body(body))


def indent_block(text: str, indent: str) -> str:
    """Prefix every line after the first with ``indent``"""
    lines = text.split("\n")
    return "\n".join([lines[0]] + [indent + line if line.strip() else line for line in lines[1:]])


def _type_args(annotation: Optional[str]) -> str:
    return f"<{annotation}>" if annotation else ""


def _dependency_list(dependencies: List[str]) -> str:
    return "[" + ", ".join(dependencies) + "]"


def import_statements(spec: ImportSpec, config: ModifierConfig) -> List[str]:
    """``import`` statements for a spec.

    A namespace import cannot share a statement with named imports, so that
    combination yields two statements.
    """
    source = config.quote(spec.source)
    if spec.is_empty:
        return [f"import {source};"]

    statements = []
    head = [spec.default_import] if spec.default_import else []
    if spec.namespace_import:
        statements.append(f"import {', '.join(head + ['* as ' + spec.namespace_import])} from {source};")
        head = []
    if spec.named_imports:
        names = "{ " + ", ".join(spec.named_imports) + " }"
        statements.append(f"import {', '.join(head + [names])} from {source};")
    elif head:
        statements.append(f"import {head[0]} from {source};")
    return statements


def state_declaration(spec: StateVariableSpec) -> str:
    return (
        f"const [{spec.name}, {spec.setter}] = "
        f"useState{_type_args(spec.type_annotation)}({spec.initial_value});"
    )


def ref_declaration(spec: RefSpec) -> str:
    return f"const {spec.name} = useRef{_type_args(spec.type_annotation)}({spec.initial_value});"


def memo_declaration(spec: MemoSpec, config: ModifierConfig) -> str:
    computation = spec.computation.strip()
    deps = _dependency_list(spec.dependencies)
    if "\n" in computation or "return " in computation or computation.endswith(";"):
        return f"const {spec.name} = useMemo(() => {{\n{block(computation, config.indent_unit)}\n}}, {deps});"
    if computation.startswith("{"):
        computation = f"({computation})"
    return f"const {spec.name} = useMemo(() => {computation}, {deps});"


def callback_declaration(spec: CallbackSpec, config: ModifierConfig) -> str:
    params = ", ".join(spec.params)
    return (
        f"const {spec.name} = useCallback(({params}) => {{\n"
        f"{block(spec.body, config.indent_unit)}\n"
        f"}}, {_dependency_list(spec.dependencies)});"
    )


def effect_call(spec: UseEffectSpec, config: ModifierConfig) -> str:
    unit = config.indent_unit
    lines = ["useEffect(() => {"]
    if spec.body.strip():
        lines.append(block(spec.body, unit))
    if spec.cleanup:
        lines.append(f"{unit}return () => {{")
        lines.append(block(spec.cleanup, unit * 2))
        lines.append(f"{unit}}};")
    if spec.dependencies is None:
        lines.append("});")
    else:
        lines.append(f"}}, {_dependency_list(spec.dependencies)});")
    return "\n".join(lines)


def _reducer_case_body(handler: str) -> str:
    body = handler.strip()
    if "\n" in body:
        return body
    if body.startswith(("return ", "return;", "throw ")):
        return body if body.endswith(";") else body + ";"
    return f"return {body.rstrip(';')};"


def reducer_function(spec: ReducerSpec, config: ModifierConfig) -> str:
    unit = config.indent_unit
    lines = [f"function {spec.reducer_name}(state, action) {{", f"{unit}switch (action.type) {{"]
    for action in spec.actions:
        lines.append(f"{unit * 2}case {config.quote(action.type)}:")
        lines.append(block(_reducer_case_body(action.handler), unit * 3))
    lines.append(f"{unit * 2}default:")
    lines.append(f"{unit * 3}return state;")
    lines.append(f"{unit}}}")
    lines.append("}")
    return "\n".join(lines)


def reducer_declaration(spec: ReducerSpec) -> str:
    return f"const [{spec.name}, {spec.dispatch_name}] = useReducer({spec.reducer_name}, {spec.initial_state});"


def function_definition(spec: FunctionSpec, config: ModifierConfig) -> str:
    params = ", ".join(spec.params)
    prefix = "async " if spec.is_async else ""
    body = block(spec.body, config.indent_unit)
    if spec.is_arrow:
        return f"const {spec.name} = {prefix}({params}) => {{\n{body}\n}};"
    return f"{prefix}function {spec.name}({params}) {{\n{body}\n}}"


def format_prop_value(value: str) -> str:
    """Attribute value as a JSX expression container"""
    value = value.strip()
    if value.startswith("{") and value.endswith("}"):
        return value
    return "{" + value + "}"


def render_attribute(name: str, value: Optional[str]) -> str:
    if value is None:
        return name
    return f"{name}={format_prop_value(value)}"


def open_tag(component: str, props: Optional[Dict[str, Optional[str]]] = None) -> str:
    attributes = "".join(" " + render_attribute(k, v) for k, v in (props or {}).items())
    return f"<{component}{attributes}>"


def close_tag(component: str) -> str:
    return f"</{component}>"


def class_template_part(template: ClassNameTemplate, config: ModifierConfig) -> str:
    if template.operator == "&&":
        return f"${{{template.variable} && {config.quote(template.true_value)}}}"
    return (
        f"${{{template.variable} ? {config.quote(template.true_value)}"
        f" : {config.quote(template.false_value)}}}"
    )
