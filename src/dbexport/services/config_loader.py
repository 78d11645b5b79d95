"""YAML defaults for the dbexport command line."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from dbexport.errors import DbExportError

# Credentials are intentionally absent: they only come from the environment.
OPTION_TYPES = {
    "output_dir": str,
    "dump_tool": str,
    "log_file": str,
    "quiet": bool,
    "verbose": bool,
    "timeout": float,
}


class ConfigLoader:
    """Reads a YAML mapping of CLI option defaults and type-checks each value."""

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        parsed = self._read(Path(config_path))
        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise DbExportError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed) - set(OPTION_TYPES), key=str)
        if unknown:
            raise DbExportError(
                f"Unknown configuration keys: {', '.join(str(key) for key in unknown)}"
            )

        return {
            key: self._check_option(key, value)
            for key, value in parsed.items()
            if value is not None
        }

    def _read(self, path: Path) -> Any:
        if not path.is_file():
            raise DbExportError(f"Config file not found: {path}")
        try:
            return yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise DbExportError(f"Invalid config file '{path}': {exc}") from exc

    def _check_option(self, key: str, value: Any) -> Any:
        expected = OPTION_TYPES[key]

        if expected is bool:
            if not isinstance(value, bool):
                raise DbExportError(f"Config option '{key}' must be true or false, got {value!r}.")
            return value

        if expected is float:
            # bool is a subclass of int.
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise DbExportError(f"Config option '{key}' must be a number, got {value!r}.")
            if value <= 0:
                raise DbExportError(f"Config option '{key}' must be positive, got {value!r}.")
            return float(value)

        if not isinstance(value, str) or not value.strip():
            raise DbExportError(
                f"Config option '{key}' must be a non-empty string, got {value!r}."
            )
        return value
