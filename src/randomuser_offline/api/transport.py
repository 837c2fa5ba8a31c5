from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import requests

from randomuser_offline.api.errors import TransportError
from randomuser_offline.util.logging import get_logger

LOG = get_logger(__name__)

DEFAULT_CONNECT_TIMEOUT = 30.0
DEFAULT_READ_TIMEOUT = 60.0
DEFAULT_USER_AGENT = "randomuser-offline/0.1"


@dataclass(frozen=True)
class TransportResponse:
    content: bytes
    status_code: int

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299


class Transport(Protocol):
    def send(self, url: str) -> TransportResponse: ...


class RequestsTransport:
    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = (connect_timeout, read_timeout)
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def send(self, url: str) -> TransportResponse:
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(exc) from exc
        return TransportResponse(content=resp.content, status_code=resp.status_code)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> RequestsTransport:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()
