"""RandomUser API client with offline fallback."""

from randomuser_offline.api.client import RandomUserClient, filter_users
from randomuser_offline.api.endpoint import DEFAULT_BASE_URL, RandomUserEndpoint
from randomuser_offline.api.errors import (
    DecodeError,
    HTTPError,
    InvalidRequest,
    RandomUserError,
    TransportError,
)
from randomuser_offline.api.models import RandomUserResponse, User, decode_response
from randomuser_offline.api.transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "DEFAULT_BASE_URL",
    "DecodeError",
    "HTTPError",
    "InvalidRequest",
    "RandomUserClient",
    "RandomUserEndpoint",
    "RandomUserError",
    "RandomUserResponse",
    "RequestsTransport",
    "Transport",
    "TransportError",
    "TransportResponse",
    "User",
    "decode_response",
    "filter_users",
]
