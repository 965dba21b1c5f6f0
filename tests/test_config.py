from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest
from notekeep_core.config import NotekeepConfig, StoreConfig
from notekeep_core.errors import ConfigError
from notekeep_core.types import Note
from notekeep_store import InProcessNoteStorage, JSONFileNoteStorage, NoteServiceBuilder


class TestConfig:
    def test_default_config(self):
        config = NotekeepConfig()
        assert config.store.backend == "file"
        assert config.store.path == ".notekeep/notes/notes.json"
        assert config.store.strict_writes is False
        assert config.logging.level == "INFO"

    def test_from_toml_missing_file(self):
        config = NotekeepConfig.from_toml("/nonexistent/path/notekeep.toml")
        assert config.store.backend == "file"  # Returns defaults

    def test_from_toml(self):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
            f.write('''
[store]
backend = "memory"
strict_writes = true
unknown_key = "ignored"

[logging]
level = "DEBUG"
json = true
''')
            f.flush()
            config = NotekeepConfig.from_toml(f.name)

        assert config.store.backend == "memory"
        assert config.store.strict_writes is True
        assert config.logging.level == "DEBUG"
        assert config.logging.json is True

        Path(f.name).unlink()

    def test_invalid_toml_returns_defaults(self, tmp_path, caplog):
        path = tmp_path / "notekeep.toml"
        path.write_text("[store\nbackend = ")
        with caplog.at_level(logging.WARNING, logger="notekeep.config"):
            assert NotekeepConfig.from_toml(path) == NotekeepConfig()
        assert "Ignoring unreadable config" in caplog.text

    def test_unknown_keys_logged(self, tmp_path, caplog):
        path = tmp_path / "notekeep.toml"
        path.write_text('stray = 1\n[store]\nbackend = "memory"\ncolour = "red"\n')
        with caplog.at_level(logging.WARNING, logger="notekeep.config"):
            config = NotekeepConfig.from_toml(path)
        assert config.store.backend == "memory"
        assert "colour" in caplog.text
        assert "stray" in caplog.text

    def test_load_layers_project_over_global(self, tmp_path, monkeypatch):
        home = tmp_path / "home"
        (home / ".notekeep").mkdir(parents=True)
        (home / ".notekeep" / "config.toml").write_text(
            '[store]\nbackend = "memory"\npath = "global.json"\n'
        )
        project = tmp_path / "project"
        project.mkdir()
        (project / "notekeep.toml").write_text('[store]\npath = "project.json"\n')
        monkeypatch.setattr(Path, "home", lambda: home)

        config = NotekeepConfig.load(project)
        assert config.store.backend == "memory"
        assert config.store.path == "project.json"

    def test_load_prefers_dot_notekeep_config(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Path, "home", lambda: tmp_path / "nohome")
        (tmp_path / ".notekeep").mkdir()
        (tmp_path / ".notekeep" / "config.toml").write_text('[store]\npath = "a.json"\n')
        (tmp_path / "notekeep.toml").write_text('[store]\npath = "b.json"\n')
        assert NotekeepConfig.load(tmp_path).store.path == "a.json"


class TestBuilder:
    def test_memory_backend(self):
        config = NotekeepConfig(store=StoreConfig(backend="memory"))
        service = NoteServiceBuilder(config).build()
        assert isinstance(service.storage, InProcessNoteStorage)

    def test_file_backend(self, tmp_path):
        path = tmp_path / "notes.json"
        config = NotekeepConfig(store=StoreConfig(backend="file", path=str(path)))
        service = NoteServiceBuilder(config).build()
        assert isinstance(service.storage, JSONFileNoteStorage)
        assert service.storage.path == path

    def test_unknown_backend(self):
        config = NotekeepConfig(store=StoreConfig(backend="postgres"))
        with pytest.raises(ConfigError):
            NoteServiceBuilder(config).build()

    async def test_memory_services_do_not_share_state(self):
        config = NotekeepConfig(store=StoreConfig(backend="memory"))
        first = NoteServiceBuilder(config).build()
        second = NoteServiceBuilder(config).build()
        await first.save(Note(title="only here"))
        assert (await second.list_notes()).notes == ()
