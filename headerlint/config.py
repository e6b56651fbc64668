from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from headerlint.header import HeaderConfig
from headerlint.checks.file_headers import DEFAULT_EXTENSIONS

################################################################################
# Config
################################################################################

CONFIG_FILE_NAME = "headerlint.yml"

KNOWN_KEYS = {"force_current_year", "code_owner", "template", "template_file", "extensions", "ignore"}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Config:
    header: HeaderConfig = field(default_factory=HeaderConfig)
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    ignore: Tuple[str, ...] = ()
    path: Optional[Path] = None

    def with_overrides(self, force_current_year: Optional[bool] = None, code_owner: Optional[str] = None) -> 'Config':
        header = self.header
        if force_current_year is not None:
            header = replace(header, force_current_year=force_current_year)
        if code_owner is not None:
            header = replace(header, code_owner=code_owner)
        return replace(self, header=header)


def _expect(raw: Dict[str, Any], key: str, kind: type, path: Path) -> Any:
    value = raw[key]
    if not isinstance(value, kind):
        raise ConfigError(f"{path}: '{key}' must be of type {kind.__name__}, got {type(value).__name__}")
    return value


def _string_list(raw: Dict[str, Any], key: str, path: Path) -> Tuple[str, ...]:
    values = _expect(raw, key, list, path)
    if not all(isinstance(v, str) for v in values):
        raise ConfigError(f"{path}: '{key}' must be a list of strings")
    return tuple(values)


def parse_config(raw: Any, path: Path) -> Config:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    unknown = set(raw) - KNOWN_KEYS
    if unknown:
        raise ConfigError(f"{path}: unknown keys: {', '.join(sorted(unknown))}")
    if "template" in raw and "template_file" in raw:
        raise ConfigError(f"{path}: 'template' and 'template_file' are mutually exclusive")

    header = HeaderConfig()
    if "force_current_year" in raw:
        header = replace(header, force_current_year=_expect(raw, "force_current_year", bool, path))
    if "code_owner" in raw:
        header = replace(header, code_owner=_expect(raw, "code_owner", str, path))
    if "template" in raw:
        header = replace(header, template=_expect(raw, "template", str, path))
    if "template_file" in raw:
        template_path = path.parent / _expect(raw, "template_file", str, path)
        try:
            header = replace(header, template=template_path.read_bytes().decode('utf-8'))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"{path}: cannot read template file {template_path}: {e}") from e

    config = Config(header=header, path=path)
    if "extensions" in raw:
        extensions = _string_list(raw, "extensions", path)
        config = replace(config, extensions=tuple(ext if ext.startswith(".") else f".{ext}" for ext in extensions))
    if "ignore" in raw:
        config = replace(config, ignore=_string_list(raw, "ignore", path))
    return config


def load_config(path: Optional[Path] = None) -> Config:
    """
    Loads the config from `path`, or from headerlint.yml in the working directory.

    A missing default config file yields the defaults; a missing explicit one is an error.
    """
    if path is None:
        path = Path(CONFIG_FILE_NAME)
        if not path.exists():
            return Config()

    try:
        with path.open(encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    return parse_config(raw, path)
