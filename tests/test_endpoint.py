from urllib.parse import parse_qs, urlsplit

import pytest

from randomuser_offline.api.endpoint import RandomUserEndpoint
from randomuser_offline.api.errors import InvalidRequest


def test_url_includes_page_results_and_seed() -> None:
    url = RandomUserEndpoint(page=2, results=25, seed="abc").url()
    parts = urlsplit(url)
    query = {k: v[0] for k, v in parse_qs(parts.query).items()}

    assert parts.scheme == "https"
    assert parts.netloc == "randomuser.me"
    assert parts.path == "/api/"
    assert query == {"results": "25", "page": "2", "seed": "abc"}


def test_url_omits_seed_when_none() -> None:
    url = RandomUserEndpoint(page=1, results=10).url()
    query = parse_qs(urlsplit(url).query)
    assert set(query) == {"page", "results"}


def test_url_escapes_seed() -> None:
    url = RandomUserEndpoint(page=1, results=1, seed="a b&c").url()
    assert parse_qs(urlsplit(url).query)["seed"] == ["a b&c"]


def test_cache_key_format() -> None:
    assert RandomUserEndpoint(page=3, results=40, seed="seedValue").cache_key == "seedValue_p3_r40"
    assert RandomUserEndpoint(page=1, results=25).cache_key == "noseed_p1_r25"


def test_cache_key_is_stable_for_equal_queries() -> None:
    first = RandomUserEndpoint(page=5, results=10, seed="s")
    second = RandomUserEndpoint(page=5, results=10, seed="s")
    assert first.cache_key == second.cache_key


@pytest.mark.parametrize(
    "endpoint",
    [
        RandomUserEndpoint(page=1, results=10, base_url="not a url"),
        RandomUserEndpoint(page=1, results=10, base_url="ftp://randomuser.me/api/"),
    ],
)
def test_invalid_endpoint_raises(endpoint: RandomUserEndpoint) -> None:
    with pytest.raises(InvalidRequest):
        endpoint.url()


def test_non_positive_page_and_results_are_passed_through() -> None:
    query = parse_qs(urlsplit(RandomUserEndpoint(page=0, results=-1).url()).query)
    assert query == {"results": ["-1"], "page": ["0"]}
