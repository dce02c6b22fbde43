"""
Biscuit - immutable HTTP cookies

Build a cookie with validated defaults, derive updated copies,
render it as a ``Set-Cookie`` header value and parse it back.
"""

from biscuit.cookies import (
    KNOWN_SAME_SITE,
    SAME_SITE_LAX,
    SAME_SITE_NONE,
    SAME_SITE_STRICT,
    Cookie,
    CookieOptions,
    format_set_cookie,
    parse_set_cookie,
)
from biscuit.exceptions import (
    BiscuitException,
    CookieError,
    InvalidConfiguration,
    MalformedInput,
)

__version__ = "0.1.0"
__all__ = [
    "Cookie",
    "CookieOptions",
    "format_set_cookie",
    "parse_set_cookie",
    "SAME_SITE_NONE",
    "SAME_SITE_LAX",
    "SAME_SITE_STRICT",
    "KNOWN_SAME_SITE",
    "BiscuitException",
    "CookieError",
    "InvalidConfiguration",
    "MalformedInput",
]
