# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load :class:`LinterConfig` instances from TOML files."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from importlib import import_module
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .config import LinterConfig, RunMode
from .errors import ConfigError, InvalidScannerError
from .plugins import available_scanners
from .scanners.base import validate_scanner
from .scanners.natural_language import create_natural_language_rule

PYPROJECT_TOOL_KEY: Final[str] = "tool"
CONFIG_KEY: Final[str] = "inklint"
CONFIG_FILENAMES: Final[tuple[str, ...]] = ("inklint.toml", ".inklint.toml")
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
RULES_KEY: Final[str] = "rules"
SCANNERS_KEY: Final[str] = "scanners"

LOGGER = logging.getLogger(__name__)


class TomlConfigSource:
    """Read a standalone inklint TOML document."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Mapping[str, Any]:
        try:
            with self.path.open("rb") as handle:
                return tomllib.load(handle)
        except OSError as exc:
            raise ConfigError(f"cannot read configuration at {self.path}: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {self.path}: {exc}") from exc

    def describe(self) -> str:
        return f"TOML configuration at {self.path}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.inklint]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(CONFIG_KEY)
        if not isinstance(section, Mapping):
            return {}
        return section

    def describe(self) -> str:
        return f"pyproject.toml ({self.path})"


def _source_for(path: Path) -> TomlConfigSource:
    if path.name == PYPROJECT_FILENAME:
        return PyProjectConfigSource(path)
    return TomlConfigSource(path)


def _declares_section(path: Path) -> bool:
    try:
        return bool(PyProjectConfigSource(path).load())
    except ConfigError:
        return False


def find_config_file(root: Path) -> Path | None:
    """Return the configuration file governing ``root``, searching upwards.

    ``inklint.toml`` and ``.inklint.toml`` win over a ``pyproject.toml`` in the
    same directory; a ``pyproject.toml`` only counts when it declares
    ``[tool.inklint]``.
    """

    current = root.resolve()
    for directory in (current, *current.parents):
        for name in CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _declares_section(pyproject):
            return pyproject
    return None


def import_object(reference: str) -> Any:
    """Import ``module:attr`` (or ``module.attr``) and return the attribute.

    Raises:
        ConfigError: If the module or attribute cannot be resolved.
    """

    module_name, sep, attr_path = reference.partition(":")
    if not sep:
        module_name, _, attr_path = reference.rpartition(".")
    if not module_name or not attr_path:
        raise ConfigError(f"'{reference}' is not an import reference of the form 'module:attr'")
    try:
        target: Any = import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"cannot import module '{module_name}': {exc}") from exc
    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigError(f"'{module_name}' has no attribute '{attr_path}'") from exc
    return target


def resolve_scanner_reference(reference: object, catalog: Mapping[str, type] | None = None) -> type:
    """Resolve a scanner reference to a scanner class.

    Args:
        reference: Built-in or plugin scanner name, an import reference such as
            ``"package.module:Scanner"``, or a scanner class.
        catalog: Named scanners; built-ins and entry-point plugins by default.

    Returns:
        type: Validated scanner class.

    Raises:
        ConfigError: If the reference cannot be resolved to a valid scanner.
    """

    if not isinstance(reference, str):
        candidate = reference
    else:
        names = catalog if catalog is not None else available_scanners()
        candidate = names[reference] if reference in names else import_object(reference)
    try:
        return validate_scanner(candidate)
    except InvalidScannerError as exc:
        raise ConfigError(str(exc)) from exc


def _resolve_scanner_entry(entry: object, catalog: Mapping[str, type]) -> object:
    if isinstance(entry, Mapping):
        resolved = dict(entry)
        for key in ("scanner", "plugin"):
            if key in resolved:
                resolved[key] = resolve_scanner_reference(resolved[key], catalog)
        return resolved
    return resolve_scanner_reference(entry, catalog)


def _build_rule(entry: object, index: int) -> dict[str, Any]:
    if not isinstance(entry, Mapping):
        raise ConfigError(f"rules[{index}] must be a table")
    rule = entry.get("rule")
    provider_ref = entry.get("provider")
    if not isinstance(rule, str) or not isinstance(provider_ref, str):
        raise ConfigError(f"rules[{index}] needs string 'rule' and 'provider' keys")
    provider = import_object(provider_ref)
    try:
        scanner = create_natural_language_rule(
            rule,
            provider,
            entry.get("severity", "warning"),
            name=entry.get("name"),
        )
        run_mode = RunMode.coerce(entry.get("run_mode", entry.get("runMode")))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"rules[{index}]: {exc}") from exc
    return {"scanner": scanner, "run_mode": run_mode}


def config_from_mapping(data: Mapping[str, Any], *, catalog: Mapping[str, type] | None = None) -> LinterConfig:
    """Build a :class:`LinterConfig` from a parsed TOML table.

    ``scanners`` entries are resolved through :func:`resolve_scanner_reference`;
    ``rules`` tables become natural-language scanners appended after them.

    Raises:
        ConfigError: If any entry is invalid.
    """

    payload = dict(data)
    names = catalog if catalog is not None else available_scanners()
    scanners_raw = payload.pop(SCANNERS_KEY, [])
    rules_raw = payload.pop(RULES_KEY, [])
    if not isinstance(scanners_raw, list) or not isinstance(rules_raw, list):
        raise ConfigError("'scanners' and 'rules' must be arrays")
    scanners = [_resolve_scanner_entry(entry, names) for entry in scanners_raw]
    scanners.extend(_build_rule(entry, index) for index, entry in enumerate(rules_raw))
    payload[SCANNERS_KEY] = tuple(scanners)
    try:
        config = LinterConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    config.descriptors()
    return config


def load_config(path: Path | None = None, *, root: Path | None = None) -> LinterConfig:
    """Load configuration from ``path`` or the file discovered from ``root``.

    Args:
        path: Explicit configuration file (``inklint.toml`` or ``pyproject.toml``).
        root: Directory to search from when ``path`` is omitted; defaults to the
            current working directory.

    Returns:
        LinterConfig: Parsed configuration, or the defaults when no file exists.

    Raises:
        ConfigError: If the file cannot be read or holds invalid settings.
    """

    if path is None:
        path = find_config_file(root or Path.cwd())
        if path is None:
            LOGGER.debug("no inklint configuration found; using defaults")
            return LinterConfig()
    elif not path.is_file():
        raise ConfigError(f"configuration file {path} does not exist")
    source = _source_for(path)
    LOGGER.debug("loading %s", source.describe())
    return config_from_mapping(source.load())


__all__ = [
    "CONFIG_FILENAMES",
    "CONFIG_KEY",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "config_from_mapping",
    "find_config_file",
    "import_object",
    "load_config",
    "resolve_scanner_reference",
]
