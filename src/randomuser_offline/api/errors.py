from __future__ import annotations


class RandomUserError(Exception):
    """Base class for every error surfaced by the RandomUser client."""


class InvalidRequest(RandomUserError):
    def __init__(self, message: str = "Invalid URL") -> None:
        super().__init__(message)


class TransportError(RandomUserError):
    def __init__(self, reason: object) -> None:
        super().__init__(f"Network error: {reason}")
        self.reason = reason


class HTTPError(RandomUserError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP error with status code: {status_code}")
        self.status_code = status_code


class DecodeError(RandomUserError):
    def __init__(self, reason: object) -> None:
        super().__init__(f"Failed to decode data: {reason}")
        self.reason = reason
