"""Creation of a starter .kiln.yml."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader

from .config import CONFIG_FILENAME, DEFAULT_ENTRYPOINT
from .errors import KilnError
from .logging import get_logger

_TEMPLATE_NAME = "kiln.yml.j2"

DEFAULT_SETTINGS: Dict[str, object] = {
    "src_dir": ".",
    "out_dir": "./out",
    "cache_file": "./kiln-cache.json",
    "entrypoint": DEFAULT_ENTRYPOINT,
    "jvm_opts": ["-Xmx256m"],
    "auto_include_implicit_deps": False,
    "transitive_rebuild": False,
}


class ConfigExistsError(KilnError):
    """Raised when init would overwrite an existing configuration file."""


def render_config(settings: Dict[str, object] | None = None) -> str:
    """Render the starter configuration with ``settings`` over the defaults."""
    values = dict(DEFAULT_SETTINGS)
    if settings:
        values.update(settings)
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).with_name("templates"))),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    return env.get_template(_TEMPLATE_NAME).render(**values)


def init_config(directory: Path = Path("."), *, force: bool = False) -> Path:
    """Write ``.kiln.yml`` into ``directory``; refuse to overwrite unless forced."""
    logger = get_logger("init")
    config_path = directory / CONFIG_FILENAME
    if config_path.exists() and not force:
        raise ConfigExistsError(f"{CONFIG_FILENAME} already exists. Use --force to overwrite.")
    try:
        config_path.write_text(render_config(), encoding="utf-8")
    except OSError as exc:
        raise KilnError(f"Failed to create {CONFIG_FILENAME}: {exc}") from exc

    logger.info("Created %s", config_path)
    for key in ("src_dir", "out_dir", "cache_file", "entrypoint", "jvm_opts"):
        logger.info("  %s = %s", key, DEFAULT_SETTINGS[key])
    return config_path


__all__ = ["ConfigExistsError", "init_config", "render_config"]
