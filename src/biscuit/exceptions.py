"""
Biscuit exceptions.
Each exception covers one kind of failure while building or reading a cookie.
"""


class BiscuitException(Exception):
    """Base exception for all biscuit errors."""
    
    def __init__(self, message: str = "An error occurred") -> None:
        self.message = message
        super().__init__(self.message)


class CookieError(BiscuitException):
    """Cookie-related errors."""
    pass


class InvalidConfiguration(CookieError):
    """
    A cookie was configured with values it cannot hold.
    
    Raised for an empty name, an unknown option, or an unsupported
    SameSite value passed to ``Cookie.with_samesite``.
    """
    pass


class MalformedInput(CookieError):
    """A raw cookie string could not be parsed."""
    pass
