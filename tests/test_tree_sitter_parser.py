import threading

import pytest
from tsx_tree_sitter import ASTWalker, Dialect, NodeKind, TSXParser, load_language


def test_load_language_is_memoized():
    assert load_language(Dialect.TSX) is load_language("tsx")


def test_load_language_shared_across_threads():
    results = []

    def load():
        results.append(load_language(Dialect.TYPESCRIPT))

    threads = [threading.Thread(target=load) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert all(lang is results[0] for lang in results)


def test_parsers_share_language_but_not_parser():
    language = load_language()
    first = TSXParser(language=language)
    second = TSXParser(language=language)
    assert first.language is second.language
    assert first._parser is not second._parser


@pytest.mark.parametrize(
    "path, dialect",
    [
        ("App.tsx", Dialect.TSX),
        ("store.ts", Dialect.TYPESCRIPT),
        ("index.js", Dialect.JAVASCRIPT),
        ("Button.jsx", Dialect.JAVASCRIPT),
        ("README", Dialect.TSX),
    ],
)
def test_dialect_for_path(path, dialect):
    assert Dialect.for_path(path) is dialect


def test_parse_clean_source():
    parser = TSXParser()
    result = parser.parse_string("const App = () => <div className=\"x\">hi</div>;\n")
    assert not result.has_error
    assert result.errors == []
    assert result.tree.root_node.type == "program"


def test_parse_reports_errors_with_location():
    parser = TSXParser()
    result = parser.parse_string("function App() {\n  return <div>;\n}\n")
    assert result.has_error
    assert result.errors
    first = result.errors[0]
    assert first.line >= 1
    assert first.column >= 1
    assert str(first).startswith(f"Syntax error at line {first.line}, column {first.column}")


def test_parse_never_raises_on_garbage():
    parser = TSXParser()
    result = parser.parse_string("}}}} <<<< const = ;")
    assert result.tree is not None
    assert result.has_error


def test_parse_file(tmp_path):
    file_path = tmp_path / "Widget.tsx"
    file_path.write_text("export default function Widget() {\n  return <span />;\n}\n")

    result = TSXParser().parse_file(file_path)
    assert not result.has_error
    assert result.text.startswith("export default function Widget")


def test_parse_string_keeps_exact_bytes():
    source = "const label = 'héllo';\n"
    result = TSXParser().parse_string(source)
    assert result.source == source.encode("utf-8")
    declarator = ASTWalker.find_all_by_type(result.tree.root_node, "variable_declarator")[0]
    value = declarator.child_by_field_name("value")
    assert ASTWalker.get_text(value, result.source) == "'héllo'"


def test_node_kind_of_unmodeled_type():
    tree = TSXParser().parse("x;")
    assert NodeKind.of(tree.root_node) is NodeKind.PROGRAM
    assert NodeKind.of(None) is NodeKind.OTHER


def test_typescript_dialect_parses_generics():
    parser = TSXParser(dialect=Dialect.TYPESCRIPT)
    result = parser.parse_string("const cast = <T,>(value: unknown) => value as T;\nconst n = <number>x;\n")
    assert not result.has_error
