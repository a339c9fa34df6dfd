"""
Errors raised while decoding canonical access identifiers.
"""


class DecodeError(ValueError):
    """Base class for identifiers that cannot be turned back into an access."""

    def __init__(self, identifier: str, message: str):
        self.identifier = identifier
        super().__init__(message)


class InvalidArityError(DecodeError):
    """Identifier has a token count (or shape) no encoder output produces."""

    def __init__(self, identifier: str, token_count: int):
        self.token_count = token_count
        super().__init__(
            identifier,
            f"Invalid access identifier '{identifier}': unexpected number of fields ({token_count})",
        )


class InvalidNumberError(DecodeError):
    """A numeric field (port, proxy port, remote port) could not be parsed."""

    def __init__(self, identifier: str, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(
            identifier,
            f"Invalid access identifier '{identifier}': {field} '{value}' is not a valid number",
        )


class InvalidFieldError(DecodeError):
    """A field has the right position but a value the access model rejects."""

    def __init__(self, identifier: str, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(
            identifier,
            f"Invalid access identifier '{identifier}': {field}: {reason}",
        )
