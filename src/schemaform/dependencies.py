"""Runtime dependency checks run before each CLI command."""

from __future__ import annotations

import importlib.util

from schemaform.exceptions import DependencyError

# Distribution name -> import name, per command.
COMMAND_DEPENDENCIES: dict[str, dict[str, str]] = {
    "compile": {"json5": "json5"},
    "export": {"json5": "json5", "httpx": "httpx"},
}


def _is_module_available(module_name: str) -> bool:
    return importlib.util.find_spec(module_name) is not None


def missing_dependencies(command: str) -> list[str]:
    """Return the distributions a command needs that cannot be imported.

    Args:
        command (str): CLI command name; unknown commands need nothing.

    Returns:
        list[str]: Missing distribution names, in declaration order.
    """
    required = COMMAND_DEPENDENCIES.get(command, {})
    return [package for package, module in required.items() if not _is_module_available(module)]


def ensure_cli_dependencies(command: str) -> None:
    """Fail fast when a command's runtime dependencies are absent.

    Raises:
        DependencyError: If one or more required modules are missing.
    """
    missing = missing_dependencies(command)
    if missing:
        raise DependencyError(missing_package=missing, message=command)
