# pos_core/errors.py


class PosError(Exception):
    """Base class for every failure reported by the ledger engine."""


class ValidationError(PosError, ValueError):
    """A required field is missing or an input is out of range. Nothing was changed."""


class EmptyCartError(ValidationError):
    def __init__(self, message: str = "Cannot commit a sale with an empty cart"):
        super().__init__(message)


class MalformedSnapshot(PosError, ValueError):
    """The blob does not decode into a structurally valid database state."""


class AuthenticationFailure(PosError):
    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)
