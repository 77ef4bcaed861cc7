from typing import Optional

from pydantic import BaseModel


class SyntaxIssue(BaseModel):
    file_path: str
    line_number: int
    column: int
    node_type: str
    message: str
    snippet: Optional[str] = None


class OutlineEntry(BaseModel):
    category: str
    name: str
    line_number: int
    detail: Optional[str] = None
