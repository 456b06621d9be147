"""Typed exception hierarchy. Every error SECURECREDS can raise."""


class SecureCredsError(Exception):
    """Base exception for all SECURECREDS errors."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class CredentialError(SecureCredsError):
    """A credential operation was rejected."""
    def __init__(self, message: str, credential_name: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.credential_name = credential_name


class CredentialValidationError(CredentialError):
    """A required credential field was empty. Raised before any mutation."""
    def __init__(self, message: str, field: str = "", operation: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.operation = operation


class CredentialNotFound(CredentialError):
    """No record with the given name exists in the caller's vault."""
    pass


class StorageError(SecureCredsError):
    """The persistence backend failed to read or commit vault state."""
    pass
