"""
Failure classification shared by the core and the HTTP host.

Recoverable failures (cards not found, transient fetch errors) are aggregated
by batch operations and reported at the end.
Exceptions below are raised only at operation boundaries; the one exception
that is never recovered from is DeckInvariantError, which marks a
programming defect.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Resource failures
    NOT_FOUND = "not_found"
    EMPTY_RESULT = "empty_result"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"
    CANCELLED = "cancelled"

    # Internal errors
    INVARIANT_VIOLATION = "invariant_violation"


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


class KnownError(Exception):
    """
    Exception for failures whose cause is known.

    Carries everything needed to explain the failure to the user.
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

    def to_detail(self) -> FailureDetail:
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class ProviderError(KnownError):
    """The card-data provider could not be reached or answered with an error."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=message,
            detail=detail,
            suggestion="Check your connection and try again in a moment.",
            status_code=502,
        )


class ImageResolutionError(KnownError):
    """A card image could not be loaded."""

    def __init__(self, source: str, detail: str | None = None):
        self.source = source
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Could not load image: {source}",
            detail=detail,
            status_code=502,
        )


class NothingToPrintError(KnownError):
    """No page can be built (empty deck, or no card fits on the page)."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.EMPTY_RESULT,
            message="There is nothing to print.",
            detail=detail,
            suggestion="Add cards to the deck or use a larger page.",
            status_code=404,
        )


class PrintJobCancelledError(KnownError):
    """The print job was dismissed before it finished."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.CANCELLED,
            message="Print job was cancelled.",
            status_code=409,
        )


class DeckInvariantError(KnownError):
    """
    The deck total drifted from the sum of its quantities.

    This is a programming defect, not a runtime condition to recover from.
    """

    def __init__(self, detail: str):
        super().__init__(
            kind=FailureKind.INVARIANT_VIOLATION,
            message="Deck state is inconsistent.",
            detail=detail,
            status_code=500,
        )
