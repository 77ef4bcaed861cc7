import pytest
from tsx_modifier import ModifierConfig
from tsx_operations import OperationExecutor, OperationRegistry, detect_props
from tsx_operations.originate_ops import ExtractComponent
from tsx_operations.templates import setter_name, ts_type_of
from tsx_tree_sitter import TSXParser

CARD_JSX = """<div className="card">
  <h2>{title}</h2>
  <button onClick={onSelect} data-id={id}>Open</button>
</div>"""


@pytest.fixture(scope="module")
def executor():
    return OperationExecutor()


def originate(executor, operation):
    # originate operations ignore the input source
    result = executor.execute_operation("", operation)
    assert result.success, result.errors
    return result


def test_context_provider_with_state(executor):
    result = originate(executor, {
        "type": "AST_ADD_CONTEXT_PROVIDER",
        "contextName": "Theme",
        "initialValue": "undefined",
        "stateVariables": [{"name": "mode", "initialValue": "'light'", "type": "string"}],
    })
    assert result.operation == "Created Context Provider: Theme"

    code = result.code
    assert code.startswith("import React, { createContext, useContext, useState, ReactNode } from 'react';\n")
    assert "const Theme = createContext<any>(undefined);" in code
    assert "export function ThemeProvider({ children }: { children: ReactNode }) {" in code
    assert "  const [mode, setMode] = useState<string>('light');" in code
    assert "  const value = { mode, setMode };" in code
    assert "    <Theme.Provider value={value}>" in code
    assert "export function useTheme() {" in code
    assert "throw new Error('useTheme must be used within a ThemeProvider');" in code


def test_context_provider_names_and_type(executor):
    result = originate(executor, {
        "type": "AST_ADD_CONTEXT_PROVIDER",
        "contextName": "AuthContext",
        "providerName": "AuthProvider",
        "hookName": "useAuth",
        "initialValue": "null",
        "valueType": "{ user: string | null }",
        "includeState": False,
    })
    code = result.code
    assert "type AuthContextValue = { user: string | null };" in code
    assert "const AuthContext = createContext<AuthContextValue>(null);" in code
    assert "  const value = null;" in code
    assert "export function useAuth() {" in code


def test_zustand_store(executor):
    result = originate(executor, {
        "type": "AST_ADD_ZUSTAND_STORE",
        "storeName": "useCartStore",
        "initialState": {"items": [], "total": 0, "open": False, "label": "Cart"},
        "actions": [
            {"name": "addItem", "params": [{"name": "item", "type": "Item"}],
             "body": "({ items: [...state.items, item] })"},
            {"name": "clear", "body": "({ items: [] })"},
        ],
    })
    assert result.operation == "Created Zustand store: useCartStore"
    assert result.code == (
        "import { create } from 'zustand';\n"
        "\n"
        "interface StoreState {\n"
        "  items: any[];\n"
        "  total: number;\n"
        "  open: boolean;\n"
        "  label: string;\n"
        "  addItem: (item: Item) => void;\n"
        "  clear: () => void;\n"
        "}\n"
        "\n"
        "export const useCartStore = create<StoreState>((set) => ({\n"
        "  items: [],\n"
        "  total: 0,\n"
        "  open: false,\n"
        '  label: "Cart",\n'
        "\n"
        "  addItem: (item: Item) => set((state) => ({ items: [...state.items, item] })),\n"
        "  clear: () => set((state) => ({ items: [] })),\n"
        "}));\n"
    )


def test_zustand_store_with_persist(executor):
    result = originate(executor, {
        "type": "AST_ADD_ZUSTAND_STORE",
        "storeName": "useSettings",
        "initialState": {"dark": True},
        "persist": True,
        "persistKey": "settings",
    })
    assert result.code == (
        "import { create } from 'zustand';\n"
        "import { persist } from 'zustand/middleware';\n"
        "\n"
        "interface StoreState {\n"
        "  dark: boolean;\n"
        "}\n"
        "\n"
        "export const useSettings = create<StoreState>()(\n"
        "  persist(\n"
        "    (set) => ({\n"
        "      dark: true,\n"
        "    }),\n"
        "    { name: 'settings' }\n"
        "  )\n"
        ");\n"
    )


def test_extract_component_detects_props(executor):
    result = originate(executor, {
        "type": "AST_EXTRACT_COMPONENT",
        "targetJSX": CARD_JSX,
        "componentName": "Card",
        "componentFile": "components/Card.tsx",
    })
    assert result.operation == "Extracted component: Card"
    assert result.code == (
        "import React from 'react';\n"
        "\n"
        "interface CardProps {\n"
        "  title: any;\n"
        "  onSelect: any;\n"
        "  id: any;\n"
        "}\n"
        "\n"
        "export function Card({ title, onSelect, id }: CardProps) {\n"
        "  return (\n"
        '    <div className="card">\n'
        "      <h2>{title}</h2>\n"
        "      <button onClick={onSelect} data-id={id}>Open</button>\n"
        "    </div>\n"
        "  );\n"
        "}\n"
    )


def test_extract_component_explicit_types(executor):
    result = originate(executor, {
        "type": "AST_EXTRACT_COMPONENT",
        "targetJSX": "<h2>{title}</h2>",
        "componentName": "Heading",
        "propTypes": {"title": "string"},
    })
    assert "interface HeadingProps {\n  title: string;\n}" in result.code
    assert "export function Heading({ title }: HeadingProps) {" in result.code


def test_extract_component_without_props(executor):
    result = originate(executor, {
        "type": "AST_EXTRACT_COMPONENT",
        "targetJSX": CARD_JSX,
        "componentName": "Card",
        "extractProps": False,
    })
    assert "export function Card() {" in result.code
    assert "interface" not in result.code


class RecordingExtractComponent(ExtractComponent):
    def __init__(self):
        self.parsers = []

    def originate(self, op, config, parser):
        self.parsers.append(parser)
        return super().originate(op, config, parser)


def test_extract_component_gets_a_fresh_parser_per_call():
    registry = OperationRegistry()
    recorder = RecordingExtractComponent()
    registry.register_originate(recorder)
    executor = OperationExecutor(registry=registry)

    operation = {"type": "AST_EXTRACT_COMPONENT", "targetJSX": "<h2>{title}</h2>", "componentName": "Heading"}
    first = executor.execute_operation("", operation)
    second = executor.execute_operation("", operation)

    assert first.success and second.success
    assert first.code == second.code
    assert recorder.parsers[0] is not recorder.parsers[1]
    assert all(parser.language is executor.language for parser in recorder.parsers)


def test_invalid_template_output_is_rejected(executor):
    result = executor.execute_operation("", {
        "type": "AST_EXTRACT_COMPONENT",
        "targetJSX": "<div>",
        "componentName": "Broken",
    })
    assert not result.success
    assert result.code is None
    assert result.errors[0].startswith("Syntax error at line")


def test_detect_props_skips_bound_names():
    jsx = "<ul>{items.map((item) => <li key={item.id}>{item.name}</li>)}</ul>"
    assert detect_props(jsx, TSXParser()) == ["items"]


def test_detect_props_skips_globals_and_tags():
    assert detect_props("<Button onClick={() => console.log(label)}>{Math.round(count)}</Button>") == [
        "label",
        "count",
    ]


def test_setter_name():
    assert setter_name("mode") == "setMode"


@pytest.mark.parametrize(
    "value, expected",
    [(True, "boolean"), (3, "number"), (1.5, "number"), ("x", "string"), ([], "any[]"), ({}, "any"), (None, "any")],
)
def test_ts_type_of(value, expected):
    assert ts_type_of(value) == expected


def test_originate_respects_quote_style():
    executor = OperationExecutor(config=ModifierConfig(quote_style="double", indent_size=4))
    result = executor.execute_operation("", {
        "type": "AST_ADD_ZUSTAND_STORE", "storeName": "useStore", "initialState": {"n": 1},
    })
    assert result.code.startswith('import { create } from "zustand";')
    assert "\n    n: 1,\n" in result.code
