"""
Settings resolution.

Later sources win: built-in defaults, then the [tool.verledger] table of
pyproject.toml in the working directory, then environment variables, then
explicit CLI overrides.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .storage import DEFAULT_FILENAME

FILE_ENV_VAR = "VERLEDGER_FILE"
ENV_NAME_VARS = ("VERLEDGER_ENV", "NODE_ENV")


@dataclass(frozen=True)
class LedgerSettings:
    version_file: Path
    auto_increment_env: str = "development"
    environment: str | None = None

    @property
    def auto_increment_enabled(self) -> bool:
        return self.environment == self.auto_increment_env


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def load_pyproject_settings(root: Path) -> dict[str, Any]:
    """Return the [tool.verledger] table, or {} if there is none."""
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return {}
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {pyproject}: {e}") from e
    return _coerce_dict(_coerce_dict(data.get("tool")).get("verledger"))


def resolve_settings(
    root: Path | None = None,
    *,
    version_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> LedgerSettings:
    root = (root or Path.cwd()).resolve()
    env = os.environ if environ is None else environ
    table = load_pyproject_settings(root)

    path = Path(str(table.get("version-file", table.get("version_file", DEFAULT_FILENAME))))
    if env.get(FILE_ENV_VAR):
        path = Path(env[FILE_ENV_VAR])
    if version_file is not None:
        path = version_file
    if not path.is_absolute():
        path = root / path

    auto_env = str(table.get("auto-increment-env", table.get("auto_increment_env", "development"))).strip()

    environment = None
    for var in ENV_NAME_VARS:
        if env.get(var):
            environment = env[var]
            break

    return LedgerSettings(
        version_file=path,
        auto_increment_env=auto_env or "development",
        environment=environment,
    )
