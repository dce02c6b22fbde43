"""
Immutable HTTP cookie for biscuit.
Builds, updates, serializes and parses ``Set-Cookie`` header values.
"""

import logging
import re
import time
from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote_plus, unquote

from biscuit.exceptions import InvalidConfiguration, MalformedInput
from biscuit.types import OptionsMapping, SameSite

logger = logging.getLogger("biscuit.cookies")

SAME_SITE_NONE = "None"
SAME_SITE_LAX = "Lax"
SAME_SITE_STRICT = "Strict"

KNOWN_SAME_SITE = frozenset({SAME_SITE_NONE, SAME_SITE_LAX, SAME_SITE_STRICT})

# IMF-fixdate, e.g. "Wed, 21 Oct 2099 07:28:00 GMT"
_IMF_FIXDATE = re.compile(
    r"([A-Za-z]{3}), (\d{1,2}) ([A-Za-z]{3}) (\d{4}) (\d{2}):(\d{2}):(\d{2}) GMT"
)
_WEEKDAYS = frozenset({"Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"})
_MONTHS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

_MAX_AGE = re.compile(r"-?\d+")

_FLAG_ATTRIBUTES = frozenset({"secure", "httponly"})
_VALUE_ATTRIBUTES = frozenset({"domain", "path", "max-age", "expires", "samesite"})


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """Cookie configuration options (Immutable Value Object)."""

    value: str | None = None
    domain: str | None = None
    path: str | None = "/"
    max_age: int | None = None  # In seconds
    secure: bool | None = True
    httponly: bool | None = True
    samesite: str | None = SAME_SITE_LAX

    @classmethod
    def from_mapping(
        cls,
        options: OptionsMapping,
        base: "CookieOptions | None" = None,
    ) -> "CookieOptions":
        """
        Overlay ``options`` on ``base`` (the defaults when omitted).

        A key given as ``None`` replaces the default rather than
        falling back to it.
        """
        unknown = set(options) - _OPTION_NAMES
        if unknown:
            raise InvalidConfiguration(
                f"Unknown cookie option(s): {', '.join(sorted(unknown))}"
            )
        return replace(base or cls(), **options)


_OPTION_NAMES = frozenset(f.name for f in fields(CookieOptions))


@dataclass(frozen=True, slots=True)
class Cookie:
    """
    An HTTP cookie (Immutable Value Object).

    Every ``with_*`` method returns a new instance; the receiver is
    never modified. ``str(cookie)`` renders the ``Set-Cookie`` value.

    Note that ``create`` stores any ``samesite`` value it is given,
    while ``with_samesite`` only accepts ``None``, ``Lax`` or ``Strict``.
    """

    name: str
    value: str | None = None
    domain: str | None = None
    path: str | None = "/"
    max_age: int | None = None
    secure: bool | None = True
    httponly: bool | None = True
    samesite: str | None = SAME_SITE_LAX

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidConfiguration("The cookie name cannot be empty")

    @classmethod
    def create(
        cls,
        name: str,
        options: CookieOptions | OptionsMapping | None = None,
        **overrides: Any,
    ) -> "Cookie":
        """
        Build a cookie from options with validated defaults.

        ``options`` may be a ``CookieOptions`` or a plain mapping;
        keyword ``overrides`` are applied on top of it.
        """
        if options is None:
            resolved = CookieOptions()
        elif isinstance(options, CookieOptions):
            resolved = options
        else:
            resolved = CookieOptions.from_mapping(options)

        if overrides:
            resolved = CookieOptions.from_mapping(overrides, resolved)

        return cls(
            name=name,
            value=resolved.value,
            domain=resolved.domain,
            path=resolved.path,
            max_age=resolved.max_age,
            secure=resolved.secure,
            httponly=resolved.httponly,
            samesite=resolved.samesite,
        )

    @classmethod
    def from_string(cls, cookie: str) -> "Cookie":
        """
        Parse a raw ``Set-Cookie`` value such as
        ``"id=abc; Path=/; Max-Age=3600; Secure; HttpOnly; SameSite=Lax"``.

        Attribute names are case-insensitive. A numeric ``Max-Age`` wins
        over ``Expires``; a non-numeric one is ignored. An ``Expires``
        date is turned into seconds from now and may be negative. Attributes missing from the string stay
        unset instead of taking the ``create`` defaults.
        """
        pairs = _split_pairs(cookie)
        if not pairs:
            raise MalformedInput("The cookie string contains no name/value pair")

        name, value = pairs[0]
        attributes: dict[str, str] = {}

        for key, raw in pairs[1:]:
            key = key.lower()
            if key in _FLAG_ATTRIBUTES:
                attributes[key] = ""
            elif key == "samesite":
                attributes[key] = raw.lower().capitalize()
            elif key in _VALUE_ATTRIBUTES:
                attributes[key] = raw
            else:
                logger.debug("Ignoring unknown attribute %r of cookie %r", key, name)

        max_age: int | None = None
        if "max-age" in attributes:
            max_age = _parse_max_age(attributes["max-age"])
            if max_age is None:
                logger.debug(
                    "Ignoring non-numeric Max-Age=%r of cookie %r",
                    attributes["max-age"], name,
                )
        if max_age is None and "expires" in attributes:
            max_age = _from_rfc7231(attributes["expires"]) - int(time.time())
            logger.debug(
                "Resolved Expires=%r of cookie %r to Max-Age=%d",
                attributes["expires"], name, max_age,
            )

        return cls.create(name, {
            "value": value,
            "domain": attributes.get("domain"),
            "path": attributes.get("path"),
            "max_age": max_age,
            "secure": True if "secure" in attributes else None,
            "httponly": True if "httponly" in attributes else None,
            "samesite": attributes.get("samesite"),
        })

    def with_value(self, value: str | None) -> "Cookie":
        return replace(self, value=value)

    def with_domain(self, domain: str | None) -> "Cookie":
        return replace(self, domain=domain)

    def with_max_age(self, max_age: int | None) -> "Cookie":
        """Set the lifetime in seconds. Zero or less expires immediately."""
        if max_age is not None and max_age <= 0:
            max_age = 0
        return replace(self, max_age=max_age)

    def with_path(self, path: str) -> "Cookie":
        """Set the path; an empty path means ``/``."""
        return replace(self, path=path or "/")

    def with_secure(self, secure: bool = True) -> "Cookie":
        return replace(self, secure=secure)

    def with_httponly(self, httponly: bool = True) -> "Cookie":
        return replace(self, httponly=httponly)

    def with_samesite(self, samesite: SameSite | str | None) -> "Cookie":
        """Set the SameSite policy. Only the canonical spellings are accepted."""
        if samesite is not None and samesite not in KNOWN_SAME_SITE:
            raise InvalidConfiguration(
                f"Invalid SameSite value {samesite!r}, "
                f"expected one of {', '.join(sorted(KNOWN_SAME_SITE))}"
            )
        return replace(self, samesite=samesite)

    def expired(self) -> "Cookie":
        """Return a copy that tells the client to drop the cookie."""
        return replace(self, value=None, max_age=0)

    @property
    def is_secure(self) -> bool:
        return bool(self.secure)

    @property
    def is_httponly(self) -> bool:
        return bool(self.httponly)

    def to_header_string(self) -> str:
        """Convert the cookie to ``Set-Cookie`` header format."""
        parts: list[str] = [f"{self.name}={quote_plus(self.value or '')}"]

        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")

        return "; ".join(parts)

    def __str__(self) -> str:
        return self.to_header_string()


def _split_pairs(cookie: str) -> list[tuple[str, str]]:
    """
    Split a cookie line into decoded ``(key, value)`` pairs.

    Only ``;`` separates pairs. ``%XX`` escapes are decoded while
    literal ``&`` and ``+`` are kept as they are.
    """
    pairs: list[tuple[str, str]] = []

    for token in cookie.split(";"):
        token = token.strip()
        if not token:
            continue
        key, _, value = token.partition("=")
        pairs.append((unquote(key.strip()), unquote(value.strip())))

    return pairs


def _parse_max_age(value: str) -> int | None:
    """Integer seconds, or ``None`` when the value is not a number."""
    if _MAX_AGE.fullmatch(value) is None:
        return None
    return int(value)


def _from_rfc7231(value: str) -> int:
    """Convert an RFC 7231 HTTP-date to a Unix timestamp."""
    # Accept the dashed cookie variant, e.g. "Wed, 21-Oct-2099 07:28:00 GMT"
    normalized = " ".join(value.replace("-", " ").split())
    try:
        parsed = _parse_imf_fixdate(normalized)
    except ValueError as exc:
        raise MalformedInput(f"Invalid Expires date: {value!r}") from exc
    return int(parsed.timestamp())


def _parse_imf_fixdate(value: str) -> datetime:
    # Day and month names are always English, whatever the locale
    match = _IMF_FIXDATE.fullmatch(value)
    if match is None:
        raise ValueError(f"Not an IMF-fixdate: {value!r}")

    weekday, day, month, year, hour, minute, second = match.groups()
    if weekday.title() not in _WEEKDAYS:
        raise ValueError(f"Unknown day name: {weekday!r}")
    if month.title() not in _MONTHS:
        raise ValueError(f"Unknown month name: {month!r}")

    return datetime(
        int(year), _MONTHS[month.title()], int(day),
        int(hour), int(minute), int(second),
        tzinfo=timezone.utc,
    )


def format_set_cookie(
    name: str,
    value: str | None,
    options: CookieOptions | OptionsMapping | None = None,
) -> str:
    """Format a Set-Cookie header value."""
    return Cookie.create(name, options, value=value).to_header_string()


def parse_set_cookie(header: str) -> Cookie:
    """Parse a Set-Cookie header value into a ``Cookie``."""
    return Cookie.from_string(header)
