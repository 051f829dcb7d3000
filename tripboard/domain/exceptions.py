"""Domain semantic exceptions."""


class DomainError(Exception):
    """Base domain exception."""

    code = "domain_error"


class UnknownLocationError(DomainError):
    """Raised when a location names a day that does not exist."""

    code = "unknown_location"

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"Unknown location: {location}")


class OutOfRangeError(DomainError):
    """Raised when an index falls outside a sequence."""

    code = "out_of_range"

    def __init__(self, location: str, index: int, length: int):
        self.location = location
        self.index = index
        self.length = length
        super().__init__(f"Index {index} out of range for {location} (length {length})")


class InvalidExpenseError(DomainError):
    """Raised when an expense fails validation before it is recorded."""

    code = "invalid_expense"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid expense: {reason}")


class BlockedDeletionError(DomainError):
    """Raised when a participant still pays for recorded expenses."""

    code = "blocked_deletion"

    def __init__(self, name: str, count: int):
        self.name = name
        self.count = count
        super().__init__(f"Cannot remove {name!r}: payer of {count} expense(s)")


class ConfirmationRequired(DomainError):
    """Raised when removing a participant would edit recorded expenses."""

    code = "confirmation_required"

    def __init__(self, name: str, count: int):
        self.name = name
        self.count = count
        super().__init__(f"Removing {name!r} edits {count} expense(s); confirmation required")


class InvalidFieldError(DomainError):
    """Raised when an edited field holds a value outside its domain."""

    code = "invalid_field"

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for {field}: {value!r}")
