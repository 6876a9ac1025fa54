from pathlib import Path

import pytest
from pydantic import ValidationError

from studymap.application import config as config_module
from studymap.application.config import AppConfig, resolve_config
from studymap.application.factory import get_activity_repository
from studymap.domain.exceptions import ActivitySourceError
from studymap.infrastructure.adapters.activity.file_activity import FileActivityRepository
from studymap.infrastructure.adapters.activity.http_activity import HttpActivityRepository


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config discovery at a temp dir and clear STUDYMAP_* env vars."""
    files = (tmp_path / "config.toml", tmp_path / ".studymap.toml")
    monkeypatch.setattr(config_module, "CONFIG_FILES", files)
    for key in ("SOURCE", "ACTIVITY_FILE", "ACTIVITY_URL", "LEVEL_THRESHOLDS"):
        monkeypatch.delenv(f"STUDYMAP_{key}", raising=False)
    return files


def test_defaults():
    config = resolve_config()
    assert config.source == "file"
    assert config.activity_file is None
    assert config.level_thresholds == (2, 10, 20)


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("STUDYMAP_SOURCE", "http")
    monkeypatch.setenv("STUDYMAP_LEVEL_THRESHOLDS", "[1, 5, 9]")

    config = resolve_config()

    assert config.source == "http"
    assert config.level_thresholds == (1, 5, 9)


def test_toml_file_is_lowest_priority(isolated_config, monkeypatch):
    isolated_config[0].write_text('source = "http"\nactivity_url = "http://from-file"\n')
    monkeypatch.setenv("STUDYMAP_ACTIVITY_URL", "http://from-env")

    config = resolve_config()

    assert config.source == "http"
    assert config.activity_url == "http://from-env"


def test_cli_overrides_win_and_none_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("STUDYMAP_SOURCE", "http")

    config = resolve_config({"source": "file", "activity_url": None})

    assert config.source == "file"
    assert config.activity_url == AppConfig.model_fields["activity_url"].default


def test_activity_file_resolved(tmp_path):
    config = resolve_config({"activity_file": tmp_path / "sub" / ".." / "a.json"})
    assert config.activity_file == (tmp_path / "a.json").resolve()


def test_invalid_thresholds_rejected():
    with pytest.raises(ValidationError):
        resolve_config({"level_thresholds": (10, 5, 20)})


def test_factory_selects_file(tmp_path):
    config = resolve_config({"activity_file": tmp_path / "a.json"})
    repo = get_activity_repository(config)
    assert isinstance(repo, FileActivityRepository)
    assert repo.path == Path(tmp_path / "a.json").resolve()


def test_factory_selects_http():
    config = resolve_config({"source": "http", "activity_url": "http://x.test/a"})
    repo = get_activity_repository(config)
    assert isinstance(repo, HttpActivityRepository)
    assert repo.url == "http://x.test/a"


def test_factory_requires_file_path():
    with pytest.raises(ActivitySourceError):
        get_activity_repository(resolve_config())
