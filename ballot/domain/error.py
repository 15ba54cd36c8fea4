"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class VoteError(DomainError):
    """Base class for recoverable vote ledger errors."""

    default_message = "Vote rejected"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class InvalidVoteValueError(VoteError):
    """Raised when a vote value is not an integer."""

    default_message = "Vote value must be an integer"

    def __init__(self, value: object = None):
        self.value = value
        super().__init__(
            f"Vote value must be an integer, got {value!r}"
            if value is not None
            else None
        )


class SelfVoteError(VoteError):
    """Raised when a voter attempts to vote on itself."""

    default_message = "Cannot vote on yourself"


class AlreadyVotedError(VoteError):
    """Raised when a second vote is cast on the same key and recast is disabled."""

    default_message = "Already voted on this item"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class VoteableNotFoundError(NotFoundError):
    """Raised by collaborators when a voteable reference does not resolve."""

    def __init__(self, identifier: str):
        super().__init__("Voteable", identifier)


class VoterNotFoundError(NotFoundError):
    """Raised by collaborators when a voter reference does not resolve."""

    def __init__(self, identifier: str):
        super().__init__("Voter", identifier)
