"""
Domain exceptions raised by services and translated to HTTP errors by the routes.
"""


class JetFinancesError(Exception):
    """Base class for application errors."""


class NoDataForPeriod(JetFinancesError):
    """The requested report period contains no months with data."""

    def __init__(self, year_filter: str):
        self.year_filter = year_filter
        super().__init__(f"No data available for year filter '{year_filter}'")


class UpstreamFetchFailure(JetFinancesError):
    """Reading records from the database failed."""


class AuthServiceError(JetFinancesError):
    """The BaaS auth service was unreachable or returned an error."""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class InvalidCredentials(AuthServiceError):
    """The auth service rejected the email/password pair."""
