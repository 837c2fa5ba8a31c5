from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any

from randomuser_offline.api.errors import DecodeError


@dataclass(frozen=True)
class Name:
    title: str
    first: str
    last: str


@dataclass(frozen=True)
class Street:
    number: int
    name: str


@dataclass(frozen=True)
class Coordinates:
    latitude: str
    longitude: str


@dataclass(frozen=True)
class Timezone:
    offset: str
    description: str


@dataclass(frozen=True)
class Location:
    street: Street
    city: str
    state: str
    country: str
    # The API sends postcodes as either strings or integers.
    postcode: str
    coordinates: Coordinates
    timezone: Timezone


@dataclass(frozen=True)
class Login:
    uuid: str
    username: str
    password: str
    salt: str
    md5: str
    sha1: str
    sha256: str


@dataclass(frozen=True)
class DateOfBirth:
    date: str
    age: int


@dataclass(frozen=True)
class Identifier:
    name: str
    value: str | None


@dataclass(frozen=True)
class Picture:
    large: str
    medium: str
    thumbnail: str


@dataclass(frozen=True, eq=False)
class User:
    gender: str
    name: Name
    location: Location
    email: str
    login: Login
    dob: DateOfBirth
    registered: DateOfBirth
    phone: str
    cell: str
    id: Identifier
    picture: Picture
    nat: str

    @property
    def full_name(self) -> str:
        return f"{self.name.title} {self.name.first} {self.name.last}"

    @property
    def full_address(self) -> str:
        loc = self.location
        return (
            f"{loc.street.number} {loc.street.name}, {loc.city}, {loc.state}, "
            f"{loc.country}, {loc.postcode}"
        )

    @property
    def age(self) -> int:
        return self.dob.age

    @property
    def unique_id(self) -> str:
        return f"{self.email}_{self.login.username}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.unique_id == other.unique_id

    def __hash__(self) -> int:
        return hash(self.unique_id)


@dataclass(frozen=True)
class Info:
    seed: str
    results: int
    page: int
    version: str


@dataclass(frozen=True)
class RandomUserResponse:
    results: list[User]
    info: Info


def decode_response(data: bytes) -> RandomUserResponse:
    """Decode a raw API payload, raising ``DecodeError`` on any schema mismatch."""
    try:
        raw = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(exc) from exc

    root = _obj(raw, "response")
    results = root.get("results")
    if not isinstance(results, list):
        raise DecodeError("'results' must be a list")
    users = [_user(_obj(item, f"results[{i}]")) for i, item in enumerate(results)]
    info = _obj(_field(root, "info"), "info")
    return RandomUserResponse(
        results=users,
        info=Info(
            seed=_str(info, "seed"),
            results=_int(info, "results"),
            page=_int(info, "page"),
            version=_str(info, "version"),
        ),
    )


def _user(raw: dict[str, Any]) -> User:
    name = _obj(_field(raw, "name"), "name")
    login = _obj(_field(raw, "login"), "login")
    ident = _obj(_field(raw, "id"), "id")
    picture = _obj(_field(raw, "picture"), "picture")
    return User(
        gender=_str(raw, "gender"),
        name=Name(title=_str(name, "title"), first=_str(name, "first"), last=_str(name, "last")),
        location=_location(_obj(_field(raw, "location"), "location")),
        email=_str(raw, "email"),
        login=Login(
            uuid=_str(login, "uuid"),
            username=_str(login, "username"),
            password=_str(login, "password"),
            salt=_str(login, "salt"),
            md5=_str(login, "md5"),
            sha1=_str(login, "sha1"),
            sha256=_str(login, "sha256"),
        ),
        dob=_date_of_birth(_obj(_field(raw, "dob"), "dob")),
        registered=_date_of_birth(_obj(_field(raw, "registered"), "registered")),
        phone=_str(raw, "phone"),
        cell=_str(raw, "cell"),
        id=Identifier(name=_str(ident, "name"), value=_optional_str(ident, "value")),
        picture=Picture(
            large=_str(picture, "large"),
            medium=_str(picture, "medium"),
            thumbnail=_str(picture, "thumbnail"),
        ),
        nat=_str(raw, "nat"),
    )


def _location(raw: dict[str, Any]) -> Location:
    street = _obj(_field(raw, "street"), "street")
    coords = _obj(_field(raw, "coordinates"), "coordinates")
    tz = _obj(_field(raw, "timezone"), "timezone")
    return Location(
        street=Street(number=_int(street, "number"), name=_str(street, "name")),
        city=_str(raw, "city"),
        state=_str(raw, "state"),
        country=_str(raw, "country"),
        postcode=_postcode(_field(raw, "postcode")),
        coordinates=Coordinates(
            latitude=_str(coords, "latitude"),
            longitude=_str(coords, "longitude"),
        ),
        timezone=Timezone(offset=_str(tz, "offset"), description=_str(tz, "description")),
    )


def _date_of_birth(raw: dict[str, Any]) -> DateOfBirth:
    return DateOfBirth(date=_str(raw, "date"), age=_int(raw, "age"))


def _postcode(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise DecodeError("Postcode must be either String or Int")


def _field(raw: dict[str, Any], key: str) -> Any:
    if key not in raw:
        raise DecodeError(f"missing key {key!r}")
    return raw[key]


def _obj(value: Any, label: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"{label!r} must be an object")
    return value


def _str(raw: dict[str, Any], key: str) -> str:
    value = _field(raw, key)
    if not isinstance(value, str):
        raise DecodeError(f"{key!r} must be a string")
    return value


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"{key!r} must be a string or null")
    return value


def _int(raw: dict[str, Any], key: str) -> int:
    value = _field(raw, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{key!r} must be an integer")
    return value
