from enum import Enum


class RedemptionPhase(str, Enum):
    VALIDATE = "validate"
    LOCATE = "locate"
    INVALIDATE = "invalidate"
    RESOLVE = "resolve"


class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class Forbidden(DomainError):
    """A client-originated generate request while client requests are disabled."""

    pass


class RedemptionError(DomainError):
    """
    Terminal failure of a redemption attempt.
    `phase` is the state-machine phase the attempt ended in.
    """

    default_phase: RedemptionPhase = RedemptionPhase.LOCATE

    def __init__(self, phase: RedemptionPhase | None = None) -> None:
        self.phase = phase or self.default_phase
        super().__init__(self.phase.value)


class InvalidInput(RedemptionError):
    """Empty or whitespace-only token."""

    default_phase = RedemptionPhase.VALIDATE


class InvalidToken(RedemptionError):
    """No matching verification record (unknown, consumed or mis-hashed)."""

    pass


class TokenExpired(RedemptionError):
    """Record found but past its expiry; the record is removed."""

    pass


class SessionNotFound(RedemptionError):
    """The bound session vanished. The token is already burned."""

    default_phase = RedemptionPhase.RESOLVE
