import json
import logging
from pathlib import Path

import typer
from tsx_operations import OperationExecutor
from tsx_tree_sitter import ASTWalker, Dialect, JSXPatterns, SourceParser, TSXParser

from .config import TransformConfig
from .converters import error_info_to_syntax_issue
from .models import OutlineEntry

app = typer.Typer(help="TSX Transform - structural edits for JSX/TSX sources")

_KNOWN_SUFFIXES = {".js", ".jsx", ".mjs", ".cjs", ".ts", ".mts", ".cts", ".tsx"}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _dialect_for(path: Path, config: TransformConfig) -> Dialect:
    if path.suffix.lower() in _KNOWN_SUFFIXES:
        return Dialect.for_path(path)
    return config.dialect


def _load_operations(ops_file: Path) -> list[dict]:
    data = json.loads(ops_file.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("operations", [data])
    if not isinstance(data, list):
        raise ValueError("expected an operation object or a list of operations")
    return data


@app.command()
def apply(
    file: Path = typer.Argument(..., help="Source file to transform"),
    ops: Path = typer.Option(..., "--ops", help="JSON file with one operation or a list of operations"),
    write: bool = typer.Option(False, help="Overwrite FILE with the result"),
    output: Path = typer.Option(None, help="Write the result to this path"),
    config_file: Path = typer.Option(Path(".tsx-transform.toml"), "--config", help="Path to config file"),
):
    """Apply AST operations to a file"""
    config = TransformConfig(config_file)
    try:
        operations = config.apply_defaults(_load_operations(ops))
    except (OSError, ValueError) as e:
        typer.echo(f"Error: could not read operations from {ops}: {e}", err=True)
        raise typer.Exit(code=1)

    source = file.read_text(encoding="utf-8")
    executor = OperationExecutor(config=config.modifier_config(), dialect=_dialect_for(file, config))
    result = executor.execute_operations(source, operations)

    if not result.success:
        for error in result.errors or []:
            typer.echo(f"ERROR: {error}", err=True)
        raise typer.Exit(code=1)

    target = output or (file if write else None)
    if target is None:
        typer.echo(result.code, nl=False)
    else:
        target.write_text(result.code, encoding="utf-8")
        typer.echo(f"Wrote {target}: {result.operation}", err=True)


@app.command()
def check(
    files: list[Path] = typer.Argument(..., help="Files to check"),
    config_file: Path = typer.Option(Path(".tsx-transform.toml"), "--config", help="Path to config file"),
):
    """Report syntax errors"""
    config = TransformConfig(config_file)
    issues = []
    for file_path in files:
        parser = TSXParser(dialect=_dialect_for(file_path, config))
        result = parser.parse_file(file_path)
        issues.extend(error_info_to_syntax_issue(e, str(file_path)) for e in result.errors)

    for issue in issues:
        typer.echo(f"ERROR: {issue.file_path}:{issue.line_number}:{issue.column} [{issue.node_type}] {issue.message}")

    typer.echo(f"\nTotal syntax errors found: {len(issues)} in {len(files)} files")
    if issues:
        raise typer.Exit(code=1)


def _outline(parser: SourceParser, source: bytes) -> list[OutlineEntry]:
    tree = parser.parse(source)
    entries = []

    for node in parser.find_imports(tree):
        info = parser.get_import_info(node)
        names = [n for n in (info.default_import, info.namespace_import and f"* as {info.namespace_import}") if n]
        names += info.named_imports
        entries.append(OutlineEntry(category="import", name=info.source, line_number=node.start_point[0] + 1,
                                    detail=", ".join(names) or None))

    for node in ASTWalker.iter_preorder(tree.root_node):
        if JSXPatterns.function_kind(node) is None:
            continue
        match = parser.match_function_node(node)
        if match is None or not match.name:
            continue
        entries.append(OutlineEntry(category="function", name=match.name, line_number=node.start_point[0] + 1,
                                    detail=match.kind.value))

    for state in parser.find_state_variable_patterns(tree):
        entries.append(OutlineEntry(category="state", name=state.state_var,
                                    line_number=state.node.start_point[0] + 1,
                                    detail=f"{state.setter_var} = {state.initial_value}"))

    exported = parser.find_default_exported_function(tree)
    if exported is not None:
        entries.append(OutlineEntry(category="default export",
                                    name=JSXPatterns.get_function_name(exported) or "anonymous",
                                    line_number=exported.start_point[0] + 1))
    return entries


@app.command()
def outline(
    file: Path = typer.Argument(..., help="File to outline"),
    config_file: Path = typer.Option(Path(".tsx-transform.toml"), "--config", help="Path to config file"),
):
    """List imports, functions, state variables and the default export"""
    config = TransformConfig(config_file)
    parser = SourceParser(dialect=_dialect_for(file, config))
    for entry in _outline(parser, file.read_bytes()):
        detail = f" ({entry.detail})" if entry.detail else ""
        typer.echo(f"{entry.line_number:>4}  {entry.category:<15} {entry.name}{detail}")


if __name__ == "__main__":
    app()
