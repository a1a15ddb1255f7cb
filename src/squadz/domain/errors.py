"""Errors raised by the squad registry and membership flows."""


class SquadError(Exception):
    """Base class for recoverable squad errors."""

    message = "Squad error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class SquadNotFoundError(SquadError):
    message = "Squad not found"


class InvalidJoinCodeError(SquadError):
    message = "Invalid join code"


class MemberNotFoundError(SquadError):
    message = "Member not found"


class NameTakenError(SquadError):
    message = "Display name already taken"


class NotLeaderError(SquadError):
    message = "Only the leader can perform this action"


class SquadFullError(SquadError):
    message = "Squad is full"


class JoinCodeMismatchError(SquadError):
    message = "Join code does not match squad"


class NotMemberError(SquadError):
    message = "Not a member of this squad"
