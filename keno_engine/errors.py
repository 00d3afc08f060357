"""Exception hierarchy for the keno odds engine and its collaborators."""


class KenoError(Exception):
    """Base class for every error raised by KENOBRAIN."""


class DomainError(KenoError, ValueError):
    """picks/hits outside the domain of the game."""


class PayoutTableError(KenoError, ValueError):
    """A payout multiplier that cannot be used (negative, NaN, not a number)."""


class PayoutFileError(KenoError):
    """A payout file could not be read or decoded."""
