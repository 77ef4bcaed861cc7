from tsx_tree_sitter import ErrorInfo

from .models import SyntaxIssue


def error_info_to_syntax_issue(error: ErrorInfo, file_path: str) -> SyntaxIssue:
    """Convert an internal dataclass error to an external Pydantic issue"""
    return SyntaxIssue(
        file_path=file_path,
        line_number=error.line,
        column=error.column,
        node_type=error.node_type,
        message=str(error),
        snippet=error.text or None,
    )
