"""
Biscuit - sample

Builds a session cookie, derives updated copies and parses a header back.
Run with: uv run python sample.py
"""


import logging

from biscuit import Cookie, InvalidConfiguration, MalformedInput, SAME_SITE_STRICT

# =============================================================================
# Logging Setup
# =============================================================================

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)
logger = logging.getLogger("biscuit.sample")


# =============================================================================
# Building cookies
# =============================================================================


def build_session_cookie(token: str) -> Cookie:
    """Session cookie scoped to the API with a one hour lifetime."""
    return Cookie.create(
        "session",
        {"value": token, "path": "/api", "max_age": 3600},
        samesite=SAME_SITE_STRICT,
    )


def main() -> None:
    session = build_session_cookie("abc 123")
    logger.info("Set-Cookie: %s", session)

    # Updates return new cookies; `session` is left as it was
    remembered = session.with_domain("example.com").with_max_age(30 * 24 * 3600)
    logger.info("Set-Cookie: %s", remembered)
    logger.info("Set-Cookie: %s", session.expired())

    raw = "theme=dark; Path=/; Expires=Wed, 21 Oct 2099 07:28:00 GMT; SameSite=lax; Priority=High"
    parsed = Cookie.from_string(raw)
    logger.info("Parsed %r", parsed)

    for bad in ("", "theme=dark; Expires=tomorrow"):
        try:
            Cookie.from_string(bad)
        except MalformedInput as exc:
            logger.warning("Rejected %r: %s", bad, exc.message)

    try:
        session.with_samesite("strict")
    except InvalidConfiguration as exc:
        logger.warning("Rejected SameSite: %s", exc.message)


if __name__ == "__main__":
    main()
