"""Configuration handling for the landscape CLI.

Reads project-wide sampling defaults from the [tool.landscape] table of
pyproject.toml and resolves the effective settings of a run.
"""

import numbers
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import tomllib

from ..constants import DEFAULT_EXPONENT, DEFAULT_SEED, MAX_EXPONENT
from ..declarations import SpaceDeclaration

KNOWN_KEYS = ("m", "seed")


def read_pyproject(root: Optional[Path] = None) -> Dict[str, Any]:
    """Read pyproject.toml configuration.

    Args:
        root: Directory holding pyproject.toml (default: current directory)

    Returns:
        The [tool.landscape] section, or empty dict if not found

    Raises:
        FileNotFoundError: If pyproject.toml doesn't exist
        tomllib.TOMLDecodeError: If TOML is malformed
    """
    root = Path(root) if root is not None else Path.cwd()
    pyproject_path = root / "pyproject.toml"

    if not pyproject_path.exists():
        raise FileNotFoundError(f"pyproject.toml not found in {root}")

    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    return data.get("tool", {}).get("landscape", {})


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Validate landscape configuration.

    Args:
        config: The [tool.landscape] configuration (or a [sampling] table)

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    for key in config:
        if key not in KNOWN_KEYS:
            errors.append(f"Unknown key: {key}")

    if "m" in config:
        m = config["m"]
        if not _is_int(m):
            errors.append(f"m must be an integer, got: {m!r}")
        elif not 0 <= m <= MAX_EXPONENT:
            errors.append(f"m must be in [0, {MAX_EXPONENT}], got: {m}")

    if "seed" in config:
        seed = config["seed"]
        if not _is_int(seed):
            errors.append(f"seed must be an integer, got: {seed!r}")
        elif seed < 0:
            errors.append(f"seed must be non-negative, got: {seed}")

    return errors


def resolve_settings(
    m: Optional[int],
    seed: Optional[int],
    declaration: SpaceDeclaration,
    project: Dict[str, Any],
) -> Tuple[int, int]:
    """Pick the effective exponent and seed of a run.

    Precedence: command line, then the space file's [sampling] table,
    then [tool.landscape], then the built-in defaults.

    Returns:
        Tuple of (m, seed)
    """
    def first(*values):
        return next(v for v in values if v is not None)

    return (
        first(m, declaration.m, project.get("m"), DEFAULT_EXPONENT),
        first(seed, declaration.seed, project.get("seed"), DEFAULT_SEED),
    )
