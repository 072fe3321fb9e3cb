"""Reader configuration loaded from defaults, files and the environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml  # type: ignore[import-untyped]
from attrs import evolve, field, fields, frozen, validators

from epubpages.json_utils import json_loads

JSONDict = Dict[str, Any]

DEFAULT_PAGE_BUDGET = 700
DEFAULT_CHAPTER_PREFIX = "OEBPS/chap"
DEFAULT_CHAPTER_SUFFIX = ".xhtml"

# Environment variables overriding individual settings.
ENV_PAGE_BUDGET = "EPUBPAGES_PAGE_BUDGET"
ENV_CHAPTER_PREFIX = "EPUBPAGES_CHAPTER_PREFIX"
ENV_CHAPTER_SUFFIX = "EPUBPAGES_CHAPTER_SUFFIX"
ENV_BUNDLE = "EPUBPAGES_BUNDLE"


class ConfigError(ValueError):
    """Raised when a configuration source holds invalid values."""


@frozen(slots=True)
class ReaderConfig:
    """Settings for chapter discovery and pagination.

    Attributes:
        page_budget: Maximum number of characters on a page.
        chapter_prefix: Archive path prefix of chapter documents.
        chapter_suffix: Archive path suffix of chapter documents.
        bundle_dir: Directory where named book resources are looked up.
    """

    page_budget: int = field(
        default=DEFAULT_PAGE_BUDGET,
        validator=[validators.instance_of(int), validators.gt(0)],
    )
    chapter_prefix: str = field(
        default=DEFAULT_CHAPTER_PREFIX, validator=validators.instance_of(str)
    )
    chapter_suffix: str = field(
        default=DEFAULT_CHAPTER_SUFFIX, validator=validators.instance_of(str)
    )
    bundle_dir: Path = field(factory=Path.cwd, converter=Path)


def _load_config_file(path: Path) -> JSONDict:
    """Read a configuration mapping from a JSON or YAML file.

    Args:
        path: Location of the configuration file.

    Returns:
        Parsed configuration dictionary.

    Throws:
        ConfigError: If the file is not valid UTF-8 JSON or YAML.
    """

    # Decode JSON or YAML depending on file extension.
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            data = json_loads(text)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"{path}: unable to parse: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return data


def _parse_budget(value: Any, source: str) -> int:  # noqa: ANN401
    """Convert ``value`` to an integer page budget."""

    # Booleans are ints in Python but never a meaningful budget.
    if isinstance(value, bool):
        raise ConfigError(f"{source}: page budget must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"{source}: page budget must be an integer, got {value!r}"
        ) from exc


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ReaderConfig:
    """Build the reader configuration.

    Values are taken from the defaults, then from the optional file at
    ``path`` and finally from ``EPUBPAGES_*`` environment variables.

    Args:
        path: Optional JSON or YAML file with configuration keys.
        environ: Environment mapping, ``os.environ`` when omitted.

    Returns:
        The resulting ``ReaderConfig``.

    Throws:
        ConfigError: If a source contains unknown keys or invalid values.
    """

    env = os.environ if environ is None else environ
    config = ReaderConfig()
    known = {attribute.name for attribute in fields(ReaderConfig)}

    if path is not None:
        data = _load_config_file(Path(path))
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"{path}: unknown configuration keys {', '.join(unknown)}"
            )
        if "page_budget" in data:
            data["page_budget"] = _parse_budget(data["page_budget"], str(path))
        config = _evolve(config, data, str(path))

    # Environment variables take precedence over the file.
    overrides: JSONDict = {}
    if env.get(ENV_PAGE_BUDGET):
        overrides["page_budget"] = _parse_budget(
            env[ENV_PAGE_BUDGET], ENV_PAGE_BUDGET
        )
    if env.get(ENV_CHAPTER_PREFIX):
        overrides["chapter_prefix"] = env[ENV_CHAPTER_PREFIX]
    if env.get(ENV_CHAPTER_SUFFIX):
        overrides["chapter_suffix"] = env[ENV_CHAPTER_SUFFIX]
    if env.get(ENV_BUNDLE):
        overrides["bundle_dir"] = env[ENV_BUNDLE]

    return _evolve(config, overrides, "environment")


def _evolve(
    config: ReaderConfig, changes: JSONDict, source: str
) -> ReaderConfig:
    """Apply ``changes`` to ``config``, reporting bad values as errors."""

    try:
        return evolve(config, **changes)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{source}: {exc}") from exc
