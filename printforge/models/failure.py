"""
Failure Classification for printing selection.

Every failure this library raises is a classified KnownError. Soft misses
(no printing satisfies a preference) are NOT errors: they are reported as
an absent assignment and the deck passes through unchanged.

Failure types:
- InvariantViolationError: malformed construction input (bad data, not retried)
- ArtistAttributionError: an edition without exactly one credited artist
- CoverageGapError: a forced replacement could not cover every basic land
- CardNotFoundError: a named card is missing from the catalog
"""

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Resource failures
    NOT_FOUND = "not_found"

    # Constraint violations
    COVERAGE_GAP = "coverage_gap"

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
        description="Explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the caller",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the library knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class InvariantViolationError(KnownError):
    """
    Raised when construction input breaks a data invariant.

    This indicates bad catalog or caller data, never a runtime
    availability condition. It is not retried.
    """

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(
            kind=FailureKind.INVARIANT_VIOLATION,
            message=message,
            detail=detail,
            suggestion="Check the catalog data the printings were built from.",
        )


class ArtistAttributionError(InvariantViolationError):
    """Raised when an edition feeding the artist grouper has other than one artist."""

    def __init__(self, edition_label: str, artists: tuple[str, ...]) -> None:
        self.edition_label = edition_label
        self.artists = artists
        super().__init__(
            message=f"Edition {edition_label} must credit exactly one artist",
            detail=f"Credited artists: {list(artists)}",
        )


class CoverageGapError(KnownError):
    """
    Raised when a forced replacement has no printing for a basic land in the deck.

    This is a hard failure: the caller asserted every basic land is covered.
    """

    def __init__(self, missing_cards: Iterable[str]) -> None:
        self.missing_cards = tuple(sorted(missing_cards))
        super().__init__(
            kind=FailureKind.COVERAGE_GAP,
            message="Forced replacement does not cover every basic land in the deck.",
            detail=f"Missing cards: {', '.join(self.missing_cards)}",
            suggestion="Supply a printing for each basic land the deck contains.",
        )


class CardNotFoundError(KnownError):
    """Raised when a required card name is absent from the catalog."""

    def __init__(self, card_name: str) -> None:
        self.card_name = card_name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Card '{card_name}' not found in catalog",
        )
