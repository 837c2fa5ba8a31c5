import pytest

from randomuser_offline.config import default_config, load_config
from randomuser_offline.util.cache import DiskUsersCache


def test_load_config_reads_sections(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        f"""
[app]
user_agent = "tests/0.1"
cache_dir = "{tmp_path.as_posix()}"

[http]
connect_timeout = 5
read_timeout = 10

[cache]
directory_name = "ConfigTests"
maximum_bytes = 1024
maximum_file_count = 3
time_to_live_seconds = 0
""",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.app.user_agent == "tests/0.1"
    assert cfg.app.base_url == "https://randomuser.me/api/"
    assert cfg.http.read_timeout == 10
    assert cfg.cache.time_to_live is None

    cache = cfg.build_cache()
    assert isinstance(cache, DiskUsersCache)
    assert cache.directory == tmp_path / "ConfigTests"
    assert cache.maximum_bytes == 1024
    assert cache.maximum_file_count == 3
    assert cache.time_to_live is None


def test_missing_config_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.toml")


def test_unknown_option_is_rejected(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[cache]\nmax_bytes = 1\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(path)


def test_default_config_matches_documented_limits() -> None:
    cfg = default_config()
    assert cfg.cache.maximum_bytes == 50 * 1024 * 1024
    assert cfg.cache.maximum_file_count == 300
    assert cfg.cache.time_to_live == 7 * 24 * 60 * 60
    assert cfg.cache.directory_name == "UsersCache"
    assert (cfg.http.connect_timeout, cfg.http.read_timeout) == (30.0, 60.0)
