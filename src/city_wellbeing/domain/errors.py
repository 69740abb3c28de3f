"""Error taxonomy shared by services and the HTTP layer."""


class WellbeingError(Exception):
    """Base class for application errors with an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(WellbeingError):
    """A required request parameter is missing or malformed."""

    status_code = 400


class NotFoundError(WellbeingError):
    """The geo lookup returned no matching city.

    Surfaced as a 500 alongside upstream failures.
    """

    status_code = 500


class UpstreamError(WellbeingError):
    """An external service call failed or returned an unusable payload."""

    status_code = 500


class AuthError(WellbeingError):
    """The API key or the user session is missing or invalid."""

    status_code = 401


class PersistenceError(WellbeingError):
    """Reading from or writing to the record store failed."""

    status_code = 500
