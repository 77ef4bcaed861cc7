"""Source templates for files created from scratch."""

import json
from typing import Any, Dict, List, Optional, Sequence

from tsx_modifier import ModifierConfig
from tsx_modifier.snippets import normalize_body

from .models import ContextStateVariable, StoreAction


def setter_name(name: str) -> str:
    return "set" + name[:1].upper() + name[1:]


def ts_type_of(value: Any) -> str:
    # bool is checked first since it is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, list):
        return "any[]"
    return "any"


def context_provider(
    config: ModifierConfig,
    context_name: str,
    provider_name: str,
    hook_name: str,
    initial_value: str,
    value_type: Optional[str] = None,
    state_variables: Sequence[ContextStateVariable] = (),
    include_state: bool = True,
) -> str:
    unit = config.indent_unit
    q = config.quote
    lines = [f"import React, {{ createContext, useContext, useState, ReactNode }} from {q('react')};", ""]

    context_type = "any"
    if value_type:
        context_type = f"{context_name}Value"
        lines += [f"type {context_type} = {value_type};", ""]

    lines += [f"const {context_name} = createContext<{context_type}>({initial_value});", ""]
    lines.append(f"export function {provider_name}({{ children }}: {{ children: ReactNode }}) {{")

    if include_state and state_variables:
        for var in state_variables:
            type_args = f"<{var.type}>" if var.type else ""
            lines.append(
                f"{unit}const [{var.name}, {setter_name(var.name)}] = useState{type_args}({var.initial_value});"
            )
        lines.append("")

    value_parts = [part for var in state_variables for part in (var.name, setter_name(var.name))]
    value = "{ " + ", ".join(value_parts) + " }" if value_parts else initial_value
    lines += [
        f"{unit}const value = {value};",
        "",
        f"{unit}return (",
        f"{unit * 2}<{context_name}.Provider value={{value}}>",
        f"{unit * 3}{{children}}",
        f"{unit * 2}</{context_name}.Provider>",
        f"{unit});",
        "}",
        "",
        f"export function {hook_name}() {{",
        f"{unit}const context = useContext({context_name});",
        f"{unit}if (context === undefined) {{",
        f"{unit * 2}throw new Error({q(f'{hook_name} must be used within a {provider_name}')});",
        f"{unit}}}",
        f"{unit}return context;",
        "}",
    ]
    return "\n".join(lines) + "\n"


def _typed_params(action: StoreAction) -> str:
    return ", ".join(f"{p.name}: {p.type or 'any'}" for p in action.params)


def zustand_store(
    config: ModifierConfig,
    store_name: str,
    initial_state: Dict[str, Any],
    actions: Sequence[StoreAction] = (),
    persist: bool = False,
    persist_key: Optional[str] = None,
) -> str:
    unit = config.indent_unit
    q = config.quote
    lines = [f"import {{ create }} from {q('zustand')};"]
    if persist:
        lines.append(f"import {{ persist }} from {q('zustand/middleware')};")
    lines.append("")

    lines.append("interface StoreState {")
    for key, value in initial_state.items():
        lines.append(f"{unit}{key}: {ts_type_of(value)};")
    for action in actions:
        lines.append(f"{unit}{action.name}: ({_typed_params(action)}) => void;")
    lines += ["}", ""]

    body_indent = unit * 2 if persist else unit
    members: List[str] = [f"{body_indent}{key}: {json.dumps(value)}," for key, value in initial_state.items()]
    if actions:
        members.append("")
    for action in actions:
        members.append(
            f"{body_indent}{action.name}: ({_typed_params(action)}) => set((state) => {action.body.strip()}),"
        )

    if persist:
        lines.append(f"export const {store_name} = create<StoreState>()(")
        lines.append(f"{unit}persist(")
        lines.append(f"{unit}{unit}(set) => ({{")
        lines += [f"{unit}{m}" if m else m for m in members]
        lines.append(f"{unit}{unit}}}),")
        lines.append(f"{unit}{unit}{{ name: {q(persist_key or store_name + '-storage')} }}")
        lines.append(f"{unit})")
        lines.append(");")
    else:
        lines.append(f"export const {store_name} = create<StoreState>((set) => ({{")
        lines += members
        lines.append("}));")
    return "\n".join(lines) + "\n"


def extracted_component(
    config: ModifierConfig,
    component_name: str,
    jsx: str,
    prop_types: Optional[Dict[str, str]] = None,
) -> str:
    unit = config.indent_unit
    lines = [f"import React from {config.quote('react')};", ""]

    signature = f"export function {component_name}() {{"
    if prop_types:
        interface = f"{component_name}Props"
        lines.append(f"interface {interface} {{")
        lines += [f"{unit}{name}: {type_};" for name, type_ in prop_types.items()]
        lines += ["}", ""]
        signature = f"export function {component_name}({{ {', '.join(prop_types)} }}: {interface}) {{"

    body = normalize_body(jsx)
    lines += [
        signature,
        f"{unit}return (",
        *[f"{unit * 2}{line}" if line.strip() else "" for line in body],
        f"{unit});",
        "}",
    ]
    return "\n".join(lines) + "\n"
