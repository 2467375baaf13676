"""Configuration loading for kiln (.kiln.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".kiln.yml"
DEFAULT_ENTRYPOINT = "Main.java"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class KilnConfig:
    """Represents the project settings defined in .kiln.yml."""

    src_dir: Path = field(default_factory=lambda: Path("."))
    out_dir: Path = field(default_factory=lambda: Path("./out"))
    cache_file: Path = field(default_factory=lambda: Path("./kiln-cache.json"))
    jvm_opts: List[str] = field(default_factory=list)
    entrypoint: Optional[str] = None
    auto_include_implicit_deps: bool = False
    transitive_rebuild: bool = False
    javac: str = "javac"
    java: str = "java"
    docs_index: Optional[Path] = None

    def resolve_entry_name(self, requested: str | None) -> str:
        """Return the entry file to use when the user may not have named one."""
        return requested or self.entrypoint or DEFAULT_ENTRYPOINT


def load_config(config_path: Path) -> KilnConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return KilnConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = KilnConfig()
    src_dir = _as_str(data.get("src_dir"))
    if src_dir:
        config.src_dir = Path(src_dir)
    out_dir = _as_str(data.get("out_dir"))
    if out_dir:
        config.out_dir = Path(out_dir)
    cache_file = _as_str(data.get("cache_file"))
    if cache_file:
        config.cache_file = Path(cache_file)
    config.jvm_opts = _as_str_list(data.get("jvm_opts"))
    config.entrypoint = _as_str(data.get("entrypoint")) or None
    config.auto_include_implicit_deps = bool(_as_bool(data.get("auto_include_implicit_deps")))
    config.transitive_rebuild = bool(_as_bool(data.get("transitive_rebuild")))
    config.javac = _as_str(data.get("javac")) or config.javac
    config.java = _as_str(data.get("java")) or config.java
    docs_index = _as_str(data.get("docs_index"))
    config.docs_index = Path(docs_index) if docs_index else None
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return config_path / CONFIG_FILENAME
    return config_path


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "KilnConfig", "load_config"]
