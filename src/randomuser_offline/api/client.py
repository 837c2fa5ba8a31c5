from __future__ import annotations

from randomuser_offline.api.endpoint import DEFAULT_BASE_URL, RandomUserEndpoint
from randomuser_offline.api.errors import (
    DecodeError,
    HTTPError,
    RandomUserError,
    TransportError,
)
from randomuser_offline.api.models import RandomUserResponse, User, decode_response
from randomuser_offline.api.transport import Transport
from randomuser_offline.util.cache import UsersCache
from randomuser_offline.util.logging import get_logger

LOG = get_logger(__name__)


class RandomUserClient:
    """Fetches pages of users, writing through to and falling back on a cache.

    A successful live response is decoded, persisted under the endpoint's
    cache key and returned. If the transport fails, answers with a non-2xx
    status, or the body does not decode, the cached payload for the same key
    is returned instead when one exists and decodes. Callers cannot tell a
    live result from a cached one.
    """

    def __init__(
        self,
        transport: Transport,
        cache: UsersCache,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self.transport = transport
        self.cache = cache
        self.base_url = base_url

    def fetch(self, page: int, results: int = 25, seed: str | None = None) -> RandomUserResponse:
        endpoint = RandomUserEndpoint(page=page, results=results, seed=seed, base_url=self.base_url)
        cache_key = endpoint.cache_key
        url = endpoint.url()

        LOG.info("Fetching users: %s", url)
        try:
            decoded, content = self._fetch_live(url)
        except RandomUserError as exc:
            return self._fallback(cache_key, exc)

        self.cache.write(cache_key, content)
        LOG.info("Fetched %s users (page %s)", len(decoded.results), page)
        return decoded

    def search_users(
        self,
        query: str,
        page: int,
        results: int = 25,
        seed: str | None = None,
    ) -> list[User]:
        response = self.fetch(page=page, results=results, seed=seed)
        return filter_users(response.results, query)

    def _fetch_live(self, url: str) -> tuple[RandomUserResponse, bytes]:
        try:
            resp = self.transport.send(url)
        except TransportError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise TransportError(exc) from exc

        if not resp.ok:
            LOG.warning("HTTP error: %s", resp.status_code)
            raise HTTPError(resp.status_code)

        return decode_response(resp.content), resp.content

    def _fallback(self, cache_key: str, error: RandomUserError) -> RandomUserResponse:
        data = self.cache.read(cache_key)
        if data is None:
            LOG.warning("Fetch failed with no cached copy for %s: %s", cache_key, error)
            raise error
        try:
            decoded = decode_response(data)
        except DecodeError as exc:
            LOG.warning("Cached copy for %s is unreadable: %s", cache_key, exc)
            raise error
        self.cache.touch(cache_key)
        LOG.warning("Using cached copy for %s after error: %s", cache_key, error)
        return decoded


def filter_users(users: list[User], query: str) -> list[User]:
    needle = query.lower()
    return [
        user
        for user in users
        if needle in user.full_name.lower()
        or needle in user.email.lower()
        or needle in user.location.city.lower()
        or needle in user.location.country.lower()
    ]
