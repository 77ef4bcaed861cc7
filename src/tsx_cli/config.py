import logging
import tomllib
from pathlib import Path

from tsx_modifier import ModifierConfig
from tsx_tree_sitter import Dialect

logger = logging.getLogger(__name__)


class TransformConfig:
    """Handles loading of .tsx-transform.toml configuration"""

    def __init__(self, config_path: Path | None = None):
        self.indent_size: int = 2
        self.quote_style: str = "single"
        self.dialect: Dialect = Dialect.TSX
        self.login_form_style: str = "styled"

        if config_path and config_path.exists():
            self._load_from_file(config_path)

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            section = data.get("tool", {}).get("tsx-transform", {})
            self.indent_size = int(section.get("indent_size", self.indent_size))
            self.quote_style = section.get("quote_style", self.quote_style)
            self.dialect = Dialect(section.get("dialect", self.dialect))
            self.login_form_style = section.get("login_form_style", self.login_form_style)
        except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
            logger.warning("Ignoring config %s: %s", path, e)

    def modifier_config(self) -> ModifierConfig:
        return ModifierConfig(indent_size=self.indent_size, quote_style=self.quote_style)

    def apply_defaults(self, operations: list[dict]) -> list[dict]:
        """Fill in config-driven defaults the operations leave unset"""
        for op in operations:
            if isinstance(op, dict) and op.get("type") == "AST_ADD_AUTHENTICATION":
                op.setdefault("loginFormStyle", self.login_form_style)
        return operations
