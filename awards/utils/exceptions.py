"""Domain exceptions.

Every error carries a machine-readable ``code`` that routers surface to
clients unchanged. Vote errors fall into two families:

* policy violations (``VotingWindowError``): the voting window is closed.
* integrity violations (``NominationNotEligibleError``, ``AlreadyVotedError``):
  the request can never succeed, so it is never retried.
"""


class AwardsError(Exception):
    """Base class for all domain errors."""

    code = "error"
    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class VotingError(AwardsError):
    """Base class for errors surfaced by the vote cast path."""


class VotingWindowError(VotingError):
    """Vote attempted outside the administratively permitted window."""

    def __init__(self, code: str, message: str | None = None):
        self.code = code
        super().__init__(message or WINDOW_DENIAL_MESSAGES.get(code, "Voting is not open"))


class NominationNotEligibleError(VotingError):
    code = "NOMINATION_NOT_ELIGIBLE"
    default_message = "Nomination not found or not approved for this category"


class AlreadyVotedError(VotingError):
    code = "ALREADY_VOTED"
    default_message = "You have already voted in this category"


class CategoryNotFoundError(VotingError):
    code = "CATEGORY_NOT_FOUND"
    default_message = "Category not found"


class CategoryNameTakenError(AwardsError):
    code = "CATEGORY_NAME_TAKEN"
    default_message = "A category with this name already exists"


class NominationNotFoundError(AwardsError):
    code = "NOMINATION_NOT_FOUND"
    default_message = "Nomination not found"


class NominationAlreadyReviewedError(AwardsError):
    code = "NOMINATION_ALREADY_REVIEWED"
    default_message = "Nomination has already been reviewed"


class InvalidReviewStatusError(AwardsError):
    code = "INVALID_REVIEW_STATUS"
    default_message = "Review status must be APPROVED or REJECTED"


class ReasonTooShortError(AwardsError):
    code = "REASON_TOO_SHORT"
    default_message = "Reason must be at least 100 characters"


class InvalidVotingWindowError(AwardsError):
    code = "INVALID_VOTING_WINDOW"
    default_message = "Voting start must be before voting end"


class InvalidGuestCountError(AwardsError):
    code = "INVALID_GUEST_COUNT"
    default_message = "Guest count is out of range"


class ResultsNotAnnouncedError(AwardsError):
    code = "RESULTS_NOT_ANNOUNCED"
    default_message = "Results have not been announced yet"


VOTING_DISABLED = "VOTING_DISABLED"
VOTING_NOT_STARTED = "VOTING_NOT_STARTED"
VOTING_ENDED = "VOTING_ENDED"

WINDOW_DENIAL_MESSAGES = {
    VOTING_DISABLED: "Voting is currently disabled",
    VOTING_NOT_STARTED: "Voting has not started yet",
    VOTING_ENDED: "Voting has ended",
}
