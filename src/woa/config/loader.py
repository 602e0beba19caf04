"""Layered YAML configuration loader.

Configuration is resolved in the following order (later values override
earlier ones):

    1. Default values
    2. /etc/woa/config.yaml
    3. ~/.woa/config.yaml
    4. ./config.yaml
    5. The WOA_CONFIG environment variable, holding a full YAML document

Nested mappings merge key by key; every other value, including the
``machines`` list, is replaced wholesale by the later layer.
"""

import logging
import os
import re
from dataclasses import dataclass
from functools import reduce
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from woa.core.errors import ConfigError, MachineNotFoundError
from woa.core.machine import Machine

logger = logging.getLogger(__name__)

_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"


class _ConfigLoader(yaml.SafeLoader):
    """SafeLoader without YAML 1.1 base-60 numbers, so unquoted MACs stay strings."""


_ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (_INT_TAG, _FLOAT_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_ConfigLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(
        r"""^(?:[-+]?0b[0-1_]+
        |[-+]?0[0-7_]+
        |[-+]?(?:0|[1-9][0-9_]*)
        |[-+]?0x[0-9a-fA-F_]+)$""",
        re.X,
    ),
    list("-+0123456789"),
)
_ConfigLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
        |\.[0-9_]+(?:[eE][-+][0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)

CONFIG_FILENAME = "config.yaml"
ENV_VAR = "WOA_CONFIG"
SYSTEM_CONFIG = Path("/etc") / "woa" / CONFIG_FILENAME
DEFAULT_LISTEN = ":7777"


class Server(BaseModel):
    model_config = ConfigDict(frozen=True)

    listen: str = DEFAULT_LISTEN


class Ping(BaseModel):
    model_config = ConfigDict(frozen=True)

    privileged: bool = False


class Config(BaseModel):
    """Fully merged configuration, read-only once resolved."""

    model_config = ConfigDict(frozen=True)

    machines: tuple[Machine, ...] = ()
    server: Server = Server()
    ping: Ping = Ping()

    @field_validator("machines", "server", "ping", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return () if info.field_name == "machines" else {}
        return value

    def find_machine(self, name: str) -> Machine:
        """
        Look up a machine by name, ignoring case.

        The first matching entry wins when several share a name.

        Raises:
            MachineNotFoundError: If no machine has that name
        """
        wanted = name.casefold()
        match = next((m for m in self.machines if m.name.casefold() == wanted), None)
        if match is None:
            raise MachineNotFoundError(name)
        return match


@dataclass(frozen=True)
class ConfigSource:
    """One named configuration layer; ``load`` returns None when it has nothing to add."""

    name: str
    load: Callable[[], Optional[dict[str, Any]]]


def load_config(path: Path) -> Optional[dict[str, Any]]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML config file

    Returns:
        Parsed configuration dictionary, or None if file is empty

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    with open(path) as f:
        result: Optional[dict[str, Any]] = yaml.load(f, Loader=_ConfigLoader)
        return result


def _as_mapping(data: Any, origin: str) -> Optional[dict[str, Any]]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ConfigError(f"{origin}: config root must be a YAML mapping")
    return data


def defaults_source() -> ConfigSource:
    defaults = Config().model_dump()
    defaults["machines"] = []
    return ConfigSource("defaults", lambda: defaults)


def file_source(path: Path) -> ConfigSource:
    """Layer backed by a YAML file; a missing file is skipped."""

    def _load() -> Optional[dict[str, Any]]:
        try:
            data = load_config(path)
        except FileNotFoundError:
            logger.debug("Config file %s not found, skipping", path)
            return None
        except yaml.YAMLError as exc:
            raise ConfigError(f"failed to parse config file {path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"failed to read config file {path}: {exc}") from exc
        logger.debug("Loaded config file %s", path)
        return _as_mapping(data, str(path))

    return ConfigSource(str(path), _load)


def env_source(var: str = ENV_VAR, environ: Optional[Mapping[str, str]] = None) -> ConfigSource:
    """Layer backed by a YAML document in an environment variable."""

    def _load() -> Optional[dict[str, Any]]:
        env = os.environ if environ is None else environ
        try:
            data = yaml.load(env.get(var, ""), Loader=_ConfigLoader)
        except yaml.YAMLError as exc:
            raise ConfigError(f"failed to load config from {var}: {exc}") from exc
        return _as_mapping(data, var)

    return ConfigSource(var, _load)


def default_sources() -> list[ConfigSource]:
    """Return the standard cascade, lowest precedence first."""
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigError(f"failed to get home directory: {exc}") from exc

    # Order here matters as later values override earlier ones
    return [
        defaults_source(),
        file_source(SYSTEM_CONFIG),
        file_source(home / ".woa" / CONFIG_FILENAME),
        file_source(Path(".") / CONFIG_FILENAME),
        env_source(),
    ]


def merge_layers(base: dict[str, Any], override: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Return ``base`` overlaid with ``override`` without mutating either."""
    merged = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_layers(current, value)
        else:
            merged[key] = value
    return merged


def resolve(sources: Optional[list[ConfigSource]] = None) -> Config:
    """
    Fold configuration sources into a single Config.

    Args:
        sources: Layers lowest precedence first (default: default_sources())

    Raises:
        ConfigError: If a layer fails to parse or the merged result is invalid
    """
    layers = default_sources() if sources is None else sources
    merged = reduce(lambda acc, src: merge_layers(acc, src.load()), layers, {})
    try:
        config = Config.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"failed to unmarshal config: {exc}") from exc
    logger.debug(
        "Resolved config from %d source(s): %d machine(s)", len(layers), len(config.machines)
    )
    return config
