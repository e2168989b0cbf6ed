class LedgerError(Exception):
    """Base class for rejected ledger operations."""


class NotFoundError(LedgerError):
    """A referenced user, car or parking spot does not exist."""


class ConflictError(LedgerError):
    """The request is well formed but clashes with the current state."""


class NoActiveDataError(LedgerError):
    """No closed parking session has been recorded yet."""
