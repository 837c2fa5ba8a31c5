from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import tomllib

from randomuser_offline.api.client import RandomUserClient
from randomuser_offline.api.endpoint import DEFAULT_BASE_URL
from randomuser_offline.api.transport import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_USER_AGENT,
    RequestsTransport,
    Transport,
)
from randomuser_offline.util.cache import (
    DEFAULT_DIRECTORY_NAME,
    DEFAULT_MAXIMUM_BYTES,
    DEFAULT_MAXIMUM_FILE_COUNT,
    DEFAULT_TIME_TO_LIVE,
    DiskUsersCache,
)


@dataclass(frozen=True)
class AppConfig:
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    cache_dir: str | None = None


@dataclass(frozen=True)
class HttpConfig:
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT


@dataclass(frozen=True)
class CacheConfig:
    directory_name: str = DEFAULT_DIRECTORY_NAME
    maximum_bytes: int = DEFAULT_MAXIMUM_BYTES
    maximum_file_count: int = DEFAULT_MAXIMUM_FILE_COUNT
    # 0 disables expiry.
    time_to_live_seconds: float = DEFAULT_TIME_TO_LIVE

    @property
    def time_to_live(self) -> float | None:
        return self.time_to_live_seconds or None


@dataclass(frozen=True)
class Config:
    app: AppConfig = field(default_factory=AppConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)

    def build_cache(self) -> DiskUsersCache:
        base_dir = Path(self.app.cache_dir).expanduser() if self.app.cache_dir else None
        return DiskUsersCache(
            directory_name=self.cache.directory_name,
            maximum_bytes=self.cache.maximum_bytes,
            maximum_file_count=self.cache.maximum_file_count,
            time_to_live=self.cache.time_to_live,
            base_dir=base_dir,
        )

    def build_transport(self) -> RequestsTransport:
        return RequestsTransport(
            user_agent=self.app.user_agent,
            connect_timeout=self.http.connect_timeout,
            read_timeout=self.http.read_timeout,
        )

    def build_client(self, transport: Transport | None = None) -> RandomUserClient:
        return RandomUserClient(
            transport=transport or self.build_transport(),
            cache=self.build_cache(),
            base_url=self.app.base_url,
        )


DEFAULT_CONFIG_PATH = Path("config.toml")


def default_config() -> Config:
    return Config()


def load_config(path: Path | None = None) -> Config:
    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(
            "Missing config.toml. Copy config.example.toml to config.toml and edit it."
        )

    raw = tomllib.loads(config_path.read_text(encoding="utf-8"))

    return Config(
        app=AppConfig(**raw.get("app", {})),
        http=HttpConfig(**raw.get("http", {})),
        cache=CacheConfig(**raw.get("cache", {})),
    )
