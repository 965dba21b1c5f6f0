from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from notekeep_core.logging import get_logger

logger = get_logger("config")


def _read_layer(path: Path) -> dict:
    """Read one TOML config layer; a missing or unreadable file adds nothing."""
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    logger.debug("Loaded config layer %s", path)
    return raw


def _merge_layers(*layers: dict) -> dict[str, dict]:
    """Merge layers table by table; later layers win key by key."""
    merged: dict[str, dict] = {}
    for layer in layers:
        for section, values in layer.items():
            if not isinstance(values, dict):
                logger.warning("Ignoring top-level config key %r", section)
                continue
            merged.setdefault(section, {}).update(values)
    return merged


@dataclass(frozen=True, slots=True)
class StoreConfig:
    backend: str = "file"  # file | memory
    path: str = ".notekeep/notes/notes.json"
    strict_writes: bool = False


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: str = "INFO"
    json: bool = False


@dataclass(frozen=True, slots=True)
class NotekeepConfig:
    """Top-level configuration, parsed from notekeep.toml."""
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_toml(
        cls, path: Path | str = "notekeep.toml"
    ) -> NotekeepConfig:
        return cls._from_raw(_merge_layers(_read_layer(Path(path))))

    @classmethod
    def load(
        cls, project_dir: Path | str | None = None
    ) -> NotekeepConfig:
        """Load config with global → project layering.

        Resolution order (later wins):
        1. Built-in defaults
        2. ~/.notekeep/config.toml (global)
        3. .notekeep/config.toml or notekeep.toml (project)
        """
        global_path = Path.home() / ".notekeep" / "config.toml"

        project_dir = (
            Path.cwd() if project_dir is None else Path(project_dir)
        )

        project_path = project_dir / ".notekeep" / "config.toml"
        if not project_path.exists():
            project_path = project_dir / "notekeep.toml"

        merged = _merge_layers(
            _read_layer(global_path), _read_layer(project_path)
        )
        return cls._from_raw(merged)

    @classmethod
    def _from_raw(cls, raw: dict[str, dict]) -> NotekeepConfig:
        """Build NotekeepConfig from merged config tables."""

        def _pick(section: str, dc: type) -> dict:
            fields = dc.__dataclass_fields__
            values = raw.get(section, {})
            unknown = sorted(set(values) - set(fields))
            if unknown:
                logger.warning(
                    "Ignoring unknown [%s] keys: %s", section, ", ".join(unknown)
                )
            return {k: v for k, v in values.items() if k in fields}

        return cls(
            store=StoreConfig(**_pick("store", StoreConfig)),
            logging=LoggingConfig(**_pick("logging", LoggingConfig)),
        )
