"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationRequiredError(InterfaceError):
    """Raised when a request lacks a valid credential."""

    def __init__(self, message: str = "Authentication required"):
        self.message = message
        super().__init__(message)
