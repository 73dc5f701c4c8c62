import pytest

from cliforge.app import paths
from cliforge.app.errors import PathResolutionError


@pytest.fixture(autouse=True)
def _fresh_paths():
    paths.reset()
    yield
    paths.reset()


def test_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    assert paths.init_data_dir() == tmp_path
    assert paths.data_dir() == tmp_path
    assert paths.config_file() == tmp_path / "config.toml"
    assert paths.cache_dir() == tmp_path / "cache"


def test_relative_override_rejected(monkeypatch):
    monkeypatch.setenv("APP_DATA_DIR", "relative/dir")
    with pytest.raises(PathResolutionError) as info:
        paths.init_data_dir()
    assert "APP_DATA_DIR must be a non-empty absolute path" in str(info.value)
    assert "relative/dir" in str(info.value)


def test_empty_override_rejected(monkeypatch):
    monkeypatch.setenv("APP_DATA_DIR", "")
    with pytest.raises(PathResolutionError):
        paths.init_data_dir()


def test_home_default(monkeypatch, tmp_path):
    monkeypatch.delenv("APP_DATA_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert paths.init_data_dir() == tmp_path / f".{paths.APP_NAME}"


def test_value_is_cached(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    first = paths.init_data_dir()
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path / "other"))
    assert paths.init_data_dir() == first
    assert paths.data_dir() == first


def test_data_dir_before_init_raises():
    with pytest.raises(RuntimeError):
        paths.data_dir()
    with pytest.raises(RuntimeError):
        paths.config_file()