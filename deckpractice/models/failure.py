"""
Failure Explanation Envelope.

Every API failure leaves in the ApiResponse envelope so the frontend can
tell an upstream format change from a wrong deck size or an unexplained
crash. Successful calls return their response model directly.

Failure types:
- KnownFailure: System knows why it failed (bad deck code, parse failure,
  wrong deck size, site unreachable)
- UnknownFailure: System does not know why it failed

Illegal table moves are NOT failures. Transitions whose precondition does
not hold return the unchanged snapshot, so they never reach this module.

AUTHORITY BOUNDARY:
All user-visible failures pass through `finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, PrivateAttr


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Deck decoding
    PARSE_FAILED = "parse_failed"
    DECK_SIZE_VIOLATION = "deck_size_violation"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Universal response envelope for all API endpoints.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    # Set only by finalize_response; not serialized
    _finalized: bool = PrivateAttr(default=False)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        Example: deck code not found, payload not decodable.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class ParseError(KnownError):
    """
    The deck page carried no card catalog at all.

    Means the site changed its markup, or the deck code does not exist.
    Unknown catalog ids inside an otherwise valid page are NOT parse errors.
    """

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.PARSE_FAILED,
            message="The deck page could not be decoded.",
            detail=detail,
            suggestion="Check the deck code. If it is correct, the card site may have changed.",
            status_code=422,
        )


class DeckValidationError(KnownError):
    """
    Raised when a practice session is asked to start from a deck that is not
    exactly the required size. The session is not created.
    """

    def __init__(self, required_size: int, actual_size: int):
        self.required_size = required_size
        self.actual_size = actual_size
        super().__init__(
            kind=FailureKind.DECK_SIZE_VIOLATION,
            message=f"A practice deck must have exactly {required_size} cards.",
            detail=f"Deck has {actual_size} cards",
            suggestion="Fix the deck on the card site and load it again.",
            status_code=400,
        )


class InvalidDeckCodeError(KnownError):
    """Deck code is empty or contains characters a site code never has."""

    def __init__(self, deck_code: str):
        self.deck_code = deck_code
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message="Invalid deck code.",
            detail=f"Deck code: {deck_code[:40]!r}",
            suggestion="Copy the deck code exactly as shown on the card site.",
            status_code=400,
        )


class FetchError(KnownError):
    """Fetching the deck page failed (HTTP error status or transport error)."""

    def __init__(self, detail: str):
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message="The card site could not be reached.",
            detail=detail,
            suggestion="Try again in a moment.",
            status_code=502,
        )


class TableNotFoundError(KnownError):
    """No practice table with the given id (expired, reset or never created)."""

    def __init__(self, table_id: str):
        self.table_id = table_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="Practice table not found.",
            detail=f"Table id: {table_id}",
            suggestion="Load the deck again to start a new table.",
            status_code=404,
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================

# Standard messages: fixed, boring, predictable

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.UNKNOWN_FAILURE: (
        "I failed and I don't know why. Try simplifying the request or retrying."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the authority boundary.

    Args:
        response: The ApiResponse to finalize

    Returns:
        The same response, marked as having passed through the boundary

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    response._finalized = True

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through the authority boundary."""
    return response._finalized


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse[Any]:
    """
    Create an unknown failure response from an exception.

    The message is fixed and cannot be customized.

    Args:
        exception: The exception that caused the failure
        include_type: Whether to include exception type in detail

    Returns:
        A finalized unknown failure response
    """
    detail = None
    if include_type:
        detail = f"{type(exception).__name__}"

    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=detail,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )

    return finalize_response(response)


def create_known_failure(error: KnownError) -> ApiResponse[Any]:
    """
    Create a finalized known failure response from a KnownError.

    Args:
        error: The raised known error

    Returns:
        A finalized known failure response
    """
    return finalize_response(error.to_response())

