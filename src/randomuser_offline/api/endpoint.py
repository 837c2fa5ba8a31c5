from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode, urlsplit, urlunsplit

from randomuser_offline.api.errors import InvalidRequest

DEFAULT_BASE_URL = "https://randomuser.me/api/"


@dataclass(frozen=True)
class RandomUserEndpoint:
    page: int
    results: int
    seed: str | None = None
    base_url: str = DEFAULT_BASE_URL

    def url(self) -> str:
        try:
            parts = urlsplit(self.base_url)
        except ValueError as exc:
            raise InvalidRequest(f"Invalid URL: {exc}") from exc
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidRequest(f"Invalid URL: {self.base_url!r}")

        params: list[tuple[str, str]] = [
            ("results", str(self.results)),
            ("page", str(self.page)),
        ]
        if self.seed is not None:
            params.append(("seed", self.seed))
        return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), ""))

    @property
    def cache_key(self) -> str:
        seed = self.seed if self.seed is not None else "noseed"
        return f"{seed}_p{self.page}_r{self.results}"
