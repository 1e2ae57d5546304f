"""Exceptions raised by census-summary."""

from typing import Iterable, Optional


class CensusSummaryError(Exception):
    """Base class for census-summary errors."""


class PreconditionMissing(CensusSummaryError):
    """The data root holding the summary files is not configured."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or (
                "Path to the census summary files is not set. "
                "Set the PATH_TO_CENSUS environment variable (or add it to a .env file) "
                "to the directory holding acs1year/, acs5year/, decennial/ and generated_data/, "
                "or pass data_root= explicitly."
            )
        )


class InvalidQuery(CensusSummaryError, ValueError):
    """The combination of query arguments is not valid."""


class UnknownReference(CensusSummaryError, ValueError):
    """A table content or geographic header is not in the year's catalog."""

    def __init__(self, reference: str, where: str, suggestions: Iterable[str] = ()):
        self.reference = reference
        hint = ", ".join(suggestions)
        message = f"The reference {reference} does not exist in {where}."
        if hint:
            message += f" Did you mean: {hint}?"
        super().__init__(message)


class DataNotAvailableError(CensusSummaryError):
    """Required summary files are not present under the data root."""

    def __init__(self, state: str, data_type: str, path: Optional[str] = None):
        self.state = state
        self.data_type = data_type
        self.path = path
        location = f" (expected {path})" if path else ""
        super().__init__(
            f"Data not available for {state} ({data_type}){location}. "
            "Download the summary files from the Census Bureau and extract them under the data root."
        )
