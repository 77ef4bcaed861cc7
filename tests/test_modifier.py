import pytest
from tsx_modifier import (
    ASTModifier,
    CallbackSpec,
    ClassNameSpec,
    ClassNameTemplate,
    ConditionalKind,
    ConditionalSpec,
    FunctionSpec,
    ImportSpec,
    InsertJSXSpec,
    InsertPosition,
    InvalidOperationError,
    MemoSpec,
    Modification,
    ModificationKind,
    ModifierConfig,
    NodeNotFoundError,
    Priority,
    PropAction,
    PropSpec,
    ReducerAction,
    ReducerSpec,
    RefSpec,
    StateVariableSpec,
    UseEffectSpec,
    WrapperSpec,
    modify_code,
)

NESTED = """import React from 'react';

export default function App() {
  return (
    <div>
      <Header />
    </div>
  );
}
"""


def element(modifier, tag):
    node = modifier.parser.find_component_by_tag(modifier.tree, tag)
    assert node is not None, tag
    return node


def generate(modifier):
    result = modifier.generate()
    assert result.success, result.errors
    return result.code


# Queue and output


def test_no_modifications_returns_source_unchanged():
    source = "const broken = ;\n"
    result = ASTModifier(source).generate()
    assert result.success
    assert result.code == source


def test_modification_rejects_bad_ranges():
    with pytest.raises(ValueError):
        Modification.replace(5, 2, "x")
    with pytest.raises(ValueError):
        Modification(ModificationKind.INSERT, 1, 3, "x")
    with pytest.raises(ValueError):
        Modification.insert(-1, "x")


def test_modification_outside_source_is_rejected():
    modifier = ASTModifier("x;\n")
    with pytest.raises(InvalidOperationError):
        modifier.replace_range(0, 100, "y")


def test_overlapping_replacements_conflict():
    modifier = ASTModifier("const value = 1;\n")
    modifier.replace_range(6, 11, "total", description="rename")
    modifier.replace_range(8, 16, "x = 2", description="rewrite")

    result = modifier.generate()
    assert not result.success
    assert result.code is None
    assert "overlaps" in result.errors[0]


def test_same_offset_inserts_follow_priority():
    modifier = ASTModifier("x;\n")
    modifier.add_modification(Modification.insert(0, "b;", Priority.STATE))
    modifier.add_modification(Modification.insert(0, "a;", Priority.IMPORT))
    assert generate(modifier) == "a;b;x;\n"


def test_inserts_at_replacement_boundary_are_allowed():
    modifier = ASTModifier("const value = 1;\n")
    modifier.replace_range(6, 11, "total")
    modifier.insert_at(11, ": number")
    assert generate(modifier) == "const total: number = 1;\n"


def test_invalid_result_is_rejected():
    modifier = ASTModifier("function App() {\n  return <div />;\n}\n")
    modifier.replace_range(0, 8, "func tion")

    result = modifier.generate()
    assert not result.success
    assert result.code is None
    assert result.errors
    assert result.errors[0].startswith("Syntax error at line")


def test_enqueue_order_does_not_shift_offsets():
    source = "const a = 1;\nconst b = 2;\n"
    modifier = ASTModifier(source)
    modifier.replace_range(23, 24, "20")
    modifier.replace_range(10, 11, "10")
    assert generate(modifier) == "const a = 10;\nconst b = 20;\n"


# Imports


def test_state_adds_react_import_at_top():
    modifier = ASTModifier("function Counter() {\n  return <div />;\n}\n")
    modifier.add_state_variable(StateVariableSpec("count", "setCount", "0"))

    assert generate(modifier) == (
        "import { useState } from 'react';\n"
        "\n"
        "function Counter() {\n"
        "  const [count, setCount] = useState(0);\n"
        "  return <div />;\n"
        "}\n"
    )


def test_hooks_share_one_react_import():
    modifier = ASTModifier("function Counter() {\n  return <div />;\n}\n")
    modifier.add_state_variable(StateVariableSpec("count", "setCount", "0"))
    modifier.add_use_effect(UseEffectSpec(body="document.title = `${count}`;", dependencies=["count"]))

    code = generate(modifier)
    assert code.count("from 'react'") == 1
    assert code.startswith("import { useState, useEffect } from 'react';\n")


def test_named_import_merges_into_existing_statement():
    source = "import { useState } from 'react';\n\nfunction A() {\n  return null;\n}\n"
    modifier = ASTModifier(source)
    modifier.add_use_effect(UseEffectSpec(body="console.log('mounted');", dependencies=[]))

    code = generate(modifier)
    assert code.startswith("import { useState, useEffect } from 'react';\n")
    assert code.count("from 'react'") == 1


def test_named_import_merges_next_to_default():
    source = "import React from 'react';\n\nfunction A() {\n  return null;\n}\n"
    modifier = ASTModifier(source)
    modifier.add_state_variable(StateVariableSpec("open", "setOpen", "false"))

    assert generate(modifier).startswith("import React, { useState } from 'react';\n")


def test_existing_name_is_not_duplicated():
    source = "import { useState } from 'react';\n\nfunction A() {\n  return null;\n}\n"
    modifier = ASTModifier(source)
    modifier.add_state_variable(StateVariableSpec("open", "setOpen", "false"))

    code = generate(modifier)
    assert code.startswith("import { useState } from 'react';\n")


def test_inline_type_import_is_not_duplicated():
    source = "import { type FC, useState } from 'react';\n\nconst x = 1;\n"
    modifier = ASTModifier(source)
    modifier.add_import(ImportSpec(source="react", named_imports=["FC", "useMemo"]))

    assert generate(modifier).startswith("import { type FC, useState, useMemo } from 'react';\n")


def test_new_import_goes_after_last_import():
    source = "import React from 'react';\nimport './app.css';\n\nconst x = 1;\n"
    modifier = ASTModifier(source)
    modifier.add_import(ImportSpec(source="clsx", default_import="clsx"))

    assert generate(modifier) == (
        "import React from 'react';\nimport './app.css';\nimport clsx from 'clsx';\n\nconst x = 1;\n"
    )


def test_new_import_goes_after_trailing_comment():
    source = "import React from 'react'; // framework\n\nconst x = 1;\n"
    modifier = ASTModifier(source)
    modifier.add_import(ImportSpec(source="clsx", default_import="clsx"))

    assert generate(modifier) == (
        "import React from 'react'; // framework\nimport clsx from 'clsx';\n\nconst x = 1;\n"
    )


def test_new_import_goes_after_directive():
    source = "'use client';\n\nexport default function Page() {\n  return <main />;\n}\n"
    modifier = ASTModifier(source)
    modifier.add_state_variable(StateVariableSpec("ready", "setReady", "false"))

    code = generate(modifier)
    assert code.startswith("'use client';\n\nimport { useState } from 'react';\n\nexport default function Page()")


def test_namespace_and_named_imports_use_separate_statements():
    modifier = ASTModifier("const x = 1;\n")
    modifier.add_import(ImportSpec(source="./api", namespace_import="api", named_imports=["get"]))

    code = generate(modifier)
    assert "import * as api from './api';\n" in code
    assert "import { get } from './api';\n" in code


def test_double_quote_style():
    modifier = ASTModifier("const x = 1;\n", config=ModifierConfig(quote_style="double"))
    modifier.add_import(ImportSpec(source="lodash", named_imports=["debounce", "debounce"]))
    assert generate(modifier).startswith('import { debounce } from "lodash";\n')


# Hooks and statements


def test_hooks_are_ordered_by_kind():
    source = "function Search() {\n  const [query, setQuery] = useState('');\n  return <input value={query} />;\n}\n"
    modifier = ASTModifier(source)
    modifier.add_callback(CallbackSpec(name="clear", body="setQuery('');"))
    modifier.add_memo(MemoSpec(name="trimmed", computation="query.trim()", dependencies=["query"]))
    modifier.add_ref(RefSpec(name="inputRef"))

    code = generate(modifier)
    assert code.endswith(
        "function Search() {\n"
        "  const [query, setQuery] = useState('');\n"
        "  const inputRef = useRef(null);\n"
        "  const trimmed = useMemo(() => query.trim(), [query]);\n"
        "  const clear = useCallback(() => {\n"
        "    setQuery('');\n"
        "  }, []);\n"
        "  return <input value={query} />;\n"
        "}\n"
    )
    first_line = code.splitlines()[0]
    assert first_line.startswith("import {")
    for hook in ("useCallback", "useMemo", "useRef"):
        assert hook in first_line


def test_new_state_goes_before_existing_hooks():
    source = "function A() {\n  const box = useRef(null);\n  return <div ref={box} />;\n}\n"
    modifier = ASTModifier(source)
    modifier.add_state_variable(StateVariableSpec("size", "setSize", "0", type_annotation="number"))

    code = generate(modifier)
    assert "{\n  const [size, setSize] = useState<number>(0);\n  const box = useRef(null);" in code


def test_memo_with_statements_uses_block_body():
    modifier = ASTModifier("function A() {\n  return null;\n}\n")
    modifier.add_memo(MemoSpec(name="sorted", computation="const copy = [...items];\nreturn copy.sort();",
                               dependencies=["items"]))

    code = generate(modifier)
    assert (
        "  const sorted = useMemo(() => {\n"
        "    const copy = [...items];\n"
        "    return copy.sort();\n"
        "  }, [items]);\n"
    ) in code


def test_memo_object_literal_is_parenthesized():
    modifier = ASTModifier("function A() {\n  return null;\n}\n")
    modifier.add_memo(MemoSpec(name="style", computation="{ color: 'red' }"))
    assert "const style = useMemo(() => ({ color: 'red' }), []);" in generate(modifier)


def test_reducer_adds_function_and_hook():
    modifier = ASTModifier("function Todo() {\n  return <ul />;\n}\n")
    modifier.add_reducer(
        ReducerSpec(
            name="todos",
            dispatch_name="dispatch",
            reducer_name="reducer",
            initial_state="[]",
            actions=[
                ReducerAction("add", "[...state, action.payload]"),
                ReducerAction("clear", "return [];"),
            ],
        )
    )

    assert generate(modifier) == (
        "import { useReducer } from 'react';\n"
        "\n"
        "function reducer(state, action) {\n"
        "  switch (action.type) {\n"
        "    case 'add':\n"
        "      return [...state, action.payload];\n"
        "    case 'clear':\n"
        "      return [];\n"
        "    default:\n"
        "      return state;\n"
        "  }\n"
        "}\n"
        "\n"
        "function Todo() {\n"
        "  const [todos, dispatch] = useReducer(reducer, []);\n"
        "  return <ul />;\n"
        "}\n"
    )


def test_reducer_object_handler_stays_an_expression():
    modifier = ASTModifier("function A() {\n  return null;\n}\n")
    modifier.add_reducer(
        ReducerSpec(name="state", dispatch_name="dispatch", reducer_name="counter", initial_state="{ n: 0 }",
                    actions=[ReducerAction("inc", "{ ...state, n: state.n + 1 }")])
    )
    assert "      return { ...state, n: state.n + 1 };\n" in generate(modifier)


def test_existing_reducer_function_is_reused():
    source = "function reducer(state, action) {\n  return state;\n}\n\nfunction A() {\n  return null;\n}\n"
    modifier = ASTModifier(source)
    modifier.add_reducer(ReducerSpec(name="s", dispatch_name="d", reducer_name="reducer", initial_state="0"))

    code = generate(modifier)
    assert code.count("function reducer") == 1
    assert "const [s, d] = useReducer(reducer, 0);" in code


def test_effect_with_cleanup_goes_before_return():
    source = (
        "function Clock() {\n"
        "  const [now, setNow] = useState(Date.now());\n"
        "  return <span>{now}</span>;\n"
        "}\n"
    )
    modifier = ASTModifier(source)
    modifier.add_use_effect(
        UseEffectSpec(
            body="const id = setInterval(() => setNow(Date.now()), 1000);",
            dependencies=[],
            cleanup="clearInterval(id);",
        )
    )

    assert generate(modifier).endswith(
        "  const [now, setNow] = useState(Date.now());\n"
        "  useEffect(() => {\n"
        "    const id = setInterval(() => setNow(Date.now()), 1000);\n"
        "    return () => {\n"
        "      clearInterval(id);\n"
        "    };\n"
        "  }, []);\n"
        "  return <span>{now}</span>;\n"
        "}\n"
    )


def test_effect_without_dependencies_omits_array():
    modifier = ASTModifier("function A() {\n  return null;\n}\n")
    modifier.add_use_effect(UseEffectSpec(body="track();"))
    assert "  useEffect(() => {\n    track();\n  });\n  return null;" in generate(modifier)


def test_add_function_variants():
    modifier = ASTModifier("function A() {\n  return <button />;\n}\n")
    modifier.add_function(FunctionSpec(name="handleClick", body="console.log('clicked');", params=["event"]))
    modifier.add_function(FunctionSpec(name="load", body="await fetch(url);", is_arrow=False, is_async=True))

    code = generate(modifier)
    assert (
        "  const handleClick = (event) => {\n"
        "    console.log('clicked');\n"
        "  };\n"
        "  async function load() {\n"
        "    await fetch(url);\n"
        "  }\n"
        "  return <button />;"
    ) in code
    assert "import" not in code


def test_function_without_return_goes_at_end():
    modifier = ASTModifier("function setup() {\n  init();\n}\n")
    modifier.add_function(FunctionSpec(name="done", body="return true;"), "setup")
    assert generate(modifier) == "function setup() {\n  init();\n  const done = () => {\n    return true;\n  };\n}\n"


def test_expression_body_cannot_take_hooks():
    modifier = ASTModifier("const App = () => <div />;\n")
    with pytest.raises(InvalidOperationError):
        modifier.add_state_variable(StateVariableSpec("x", "setX", "0"))


def test_missing_target_function():
    modifier = ASTModifier("function A() {\n  return null;\n}\n")
    with pytest.raises(NodeNotFoundError) as exc:
        modifier.add_ref(RefSpec(name="r"), "Missing")
    assert str(exc.value) == "Could not find component function: Missing"


def test_target_function_selects_component():
    source = "function First() {\n  return null;\n}\n\nfunction Second() {\n  return null;\n}\n"
    modifier = ASTModifier(source)
    modifier.add_ref(RefSpec(name="el"), "Second")
    code = generate(modifier)
    assert "function Second() {\n  const el = useRef(null);" in code
    assert "function First() {\n  return null;" in code


# JSX


def test_wrap_element_with_import():
    modifier = ASTModifier(NESTED)
    spec = WrapperSpec(
        component="ThemeProvider",
        props={"theme": "theme"},
        import_spec=ImportSpec(source="./theme", named_imports=["ThemeProvider"]),
    )
    modifier.wrap_element(element(modifier, "Header"), spec)

    code = generate(modifier)
    assert "<ThemeProvider theme={theme}><Header /></ThemeProvider>" in code
    assert code.startswith("import React from 'react';\nimport { ThemeProvider } from './theme';\n")


def test_two_wraps_share_one_import():
    source = "function A() {\n  return <div><Left /><Right /></div>;\n}\n"
    modifier = ASTModifier(source)
    spec = WrapperSpec(component="Box", import_spec=ImportSpec(source="./box", default_import="Box"))
    modifier.wrap_element(element(modifier, "Left"), spec)
    modifier.wrap_element(element(modifier, "Right"), spec)

    code = generate(modifier)
    assert code.count("import Box from './box';") == 1
    assert "<div><Box><Left /></Box><Box><Right /></Box></div>" in code


def test_nested_wraps_stay_balanced():
    modifier = ASTModifier("const A = () => <div><Item /></div>;\n")
    item = element(modifier, "Item")
    modifier.wrap_element(item, WrapperSpec(component="Outer"))
    modifier.wrap_element(item, WrapperSpec(component="Inner"))
    assert "<div><Outer><Inner><Item /></Inner></Outer></div>" in generate(modifier)


def test_conditional_wraps_outside_wrapper():
    modifier = ASTModifier(PAGE)
    root = element(modifier, "div")
    modifier.wrap_element(root, WrapperSpec(component="Card"))
    modifier.wrap_in_conditional(ConditionalSpec(condition="ok"))
    assert "return ok ? <Card><div>Hi</div></Card> : null;" in generate(modifier)


def test_wrap_requires_jsx():
    modifier = ASTModifier("const x = 1;\n")
    with pytest.raises(InvalidOperationError):
        modifier.wrap_element(modifier.tree.root_node, WrapperSpec(component="Box"))


@pytest.mark.parametrize(
    "tag, spec, expected",
    [
        ('<div className="card">x</div>', ClassNameSpec(static_classes=["active"]), 'className="card active"'),
        ('<div className="card">x</div>', ClassNameSpec(static_classes=["card"]), 'className="card"'),
        ('<div id="x">x</div>', ClassNameSpec(static_classes=["a b"]), '<div id="x" className="a b">'),
        (
            '<div className="card">x</div>',
            ClassNameSpec(template=ClassNameTemplate("isOpen", "open", "closed")),
            "className={`card ${isOpen ? 'open' : 'closed'}`}",
        ),
        (
            "<div>x</div>",
            ClassNameSpec(template=ClassNameTemplate("isOpen", "open", operator="&&")),
            "<div className={`${isOpen && 'open'}`}>",
        ),
        (
            "<div className={styles.box}>x</div>",
            ClassNameSpec(static_classes=["wide"]),
            "className={`wide ${styles.box}`}",
        ),
    ],
)
def test_modify_class_name(tag, spec, expected):
    modifier = ASTModifier(f"const A = () => {tag};\n")
    modifier.modify_class_name(element(modifier, "div"), spec)
    assert expected in generate(modifier)


def test_insert_jsx_inside_end_multiline():
    modifier = ASTModifier(NESTED)
    modifier.insert_jsx(element(modifier, "div"), InsertJSXSpec(jsx="<Footer />", position=InsertPosition.INSIDE_END))
    assert "      <Header />\n      <Footer />\n    </div>" in generate(modifier)


def test_insert_jsx_inside_start_multiline():
    modifier = ASTModifier(NESTED)
    modifier.insert_jsx(element(modifier, "div"), InsertJSXSpec(jsx="<Nav />", position=InsertPosition.INSIDE_START))
    assert "    <div>\n      <Nav />\n      <Header />" in generate(modifier)


def test_insert_jsx_siblings():
    modifier = ASTModifier(NESTED)
    header = element(modifier, "Header")
    modifier.insert_jsx(header, InsertJSXSpec(jsx="<Banner />", position=InsertPosition.BEFORE))
    modifier.insert_jsx(header, InsertJSXSpec(jsx="<Sidebar />", position=InsertPosition.AFTER))

    assert "    <div>\n      <Banner />\n      <Header />\n      <Sidebar />\n    </div>" in generate(modifier)


def test_insert_jsx_next_to_root_uses_fragment():
    modifier = ASTModifier("function A() {\n  return <main />;\n}\n")
    modifier.insert_jsx(element(modifier, "main"), InsertJSXSpec(jsx="<aside />", position=InsertPosition.AFTER))

    code = generate(modifier)
    assert "return <>\n  <main />\n  <aside />\n  </>;" in code


def test_insert_jsx_inline_element():
    modifier = ASTModifier("const A = () => <p>Hello</p>;\n")
    modifier.insert_jsx(element(modifier, "p"), InsertJSXSpec(jsx="<b>!</b>"))
    assert generate(modifier) == "const A = () => <p>Hello<b>!</b></p>;\n"


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("<Panel />", "<Panel><span>x</span></Panel>"),
        ('<Panel title="t" />', '<Panel title="t"><span>x</span></Panel>'),
    ],
)
def test_insert_jsx_into_self_closing(tag, expected):
    modifier = ASTModifier(f"const A = () => <div>{tag}</div>;\n")
    modifier.insert_jsx(element(modifier, "Panel"), InsertJSXSpec(jsx="<span>x</span>",
                                                                 position=InsertPosition.INSIDE_START))
    assert expected in generate(modifier)


def test_new_prop_and_children_on_self_closing_element():
    modifier = ASTModifier('const A = () => <div><Card title="x" /></div>;\n')
    card = element(modifier, "Card")
    modifier.modify_prop(card, PropSpec(name="open", value="true"))
    modifier.insert_jsx(card, InsertJSXSpec(jsx="<span>x</span>", position=InsertPosition.INSIDE_END))
    assert '<Card title="x" open={true}><span>x</span></Card>' in generate(modifier)


def test_insert_jsx_multibyte_source():
    modifier = ASTModifier("function Greet() {\n  return <p>héllo wörld</p>;\n}\n")
    modifier.insert_jsx(element(modifier, "p"), InsertJSXSpec(jsx="<b>✓</b>"))
    assert "<p>héllo wörld<b>✓</b></p>" in generate(modifier)


def test_modify_prop_add_wraps_value():
    modifier = ASTModifier("const A = () => <h1>Title</h1>;\n")
    modifier.modify_prop(element(modifier, "h1"), PropSpec(name="id", value='"main-title"'))
    assert '<h1 id={"main-title"}>' in generate(modifier)


def test_modify_prop_update():
    modifier = ASTModifier("const A = () => <input value={a} />;\n")
    modifier.modify_prop(element(modifier, "input"), PropSpec(name="value", value="b", action=PropAction.UPDATE))
    assert "<input value={b} />" in generate(modifier)


def test_modify_prop_remove():
    modifier = ASTModifier("const A = () => <input disabled value={a} />;\n")
    modifier.modify_prop(element(modifier, "input"), PropSpec(name="disabled", action=PropAction.REMOVE))
    assert "<input value={a} />" in generate(modifier)


def test_modify_prop_remove_missing_is_noop():
    source = "const A = () => <input value={a} />;\n"
    modifier = ASTModifier(source)
    modifier.modify_prop(element(modifier, "input"), PropSpec(name="disabled", action=PropAction.REMOVE))
    assert modifier.modifications == []
    assert generate(modifier) == source


def test_modify_prop_boolean():
    modifier = ASTModifier("const A = () => <input />;\n")
    modifier.modify_prop(element(modifier, "input"), PropSpec(name="required"))
    assert "<input required />" in generate(modifier)


# Conditionals


PAGE = "function Page() {\n  return <div>Hi</div>;\n}\n"


def test_ternary_with_fallback():
    modifier = ASTModifier(PAGE)
    modifier.wrap_in_conditional(ConditionalSpec(condition="isReady", fallback="<Login />"))
    assert "  return isReady ? <div>Hi</div> : (\n    <Login />\n  );\n" in generate(modifier)


def test_ternary_without_fallback():
    modifier = ASTModifier(PAGE)
    modifier.wrap_in_conditional(ConditionalSpec(condition="isReady"))
    assert "return isReady ? <div>Hi</div> : null;" in generate(modifier)


def test_ternary_around_parenthesized_return():
    modifier = ASTModifier("function Page() {\n  return (\n    <div>Hi</div>\n  );\n}\n")
    modifier.wrap_in_conditional(ConditionalSpec(condition="ok"))
    assert "return ok ? (\n    <div>Hi</div>\n  ) : null;" in generate(modifier)


def test_and_guard():
    modifier = ASTModifier(PAGE)
    modifier.wrap_in_conditional(ConditionalSpec(condition="isReady", kind=ConditionalKind.AND))
    assert "return isReady && <div>Hi</div>;" in generate(modifier)


def test_and_guard_parenthesizes_loose_expression():
    modifier = ASTModifier("function total() {\n  return a + b;\n}\n")
    modifier.wrap_in_conditional(ConditionalSpec(condition="ready", kind=ConditionalKind.AND), "total")
    assert "return ready && (a + b);" in generate(modifier)


def test_early_return_guard():
    modifier = ASTModifier(PAGE)
    modifier.wrap_in_conditional(ConditionalSpec(condition="isReady", kind=ConditionalKind.IF_RETURN))
    assert generate(modifier) == (
        "function Page() {\n"
        "  if (!isReady) {\n"
        "    return null;\n"
        "  }\n"
        "  return <div>Hi</div>;\n"
        "}\n"
    )


def test_early_return_negates_compound_condition():
    modifier = ASTModifier(PAGE)
    modifier.wrap_in_conditional(
        ConditionalSpec(condition="user.loaded", fallback="<Spinner />", kind=ConditionalKind.IF_RETURN)
    )
    assert (
        "  if (!(user.loaded)) {\n"
        "    return (\n"
        "      <Spinner />\n"
        "    );\n"
        "  }\n"
        "  return <div>Hi</div>;"
    ) in generate(modifier)


def test_conditional_on_expression_body():
    modifier = ASTModifier("const Tag = () => <span />;\n")
    modifier.wrap_in_conditional(ConditionalSpec(condition="show", kind=ConditionalKind.AND))
    assert generate(modifier) == "const Tag = () => show && <span />;\n"


def test_conditional_needs_return():
    modifier = ASTModifier("function Page() {\n  render();\n}\n")
    with pytest.raises(NodeNotFoundError):
        modifier.wrap_in_conditional(ConditionalSpec(condition="x"))


# modify_code


def test_modify_code_success():
    result = modify_code(PAGE, lambda m: m.add_ref(RefSpec(name="root")))
    assert result.success
    assert "const root = useRef(null);" in result.code


def test_modify_code_reports_lookup_errors():
    result = modify_code(PAGE, lambda m: m.add_ref(RefSpec(name="root"), "Nope"))
    assert not result.success
    assert result.code is None
    assert result.errors == ["Could not find component function: Nope"]


def test_indent_size_config():
    modifier = ASTModifier("function A() {\n    return null;\n}\n", config=ModifierConfig(indent_size=4))
    modifier.add_callback(CallbackSpec(name="go", body="run();", params=["id"], dependencies=["run"]))
    assert "    const go = useCallback((id) => {\n        run();\n    }, [run]);\n" in generate(modifier)
