# ----------------------------------------------------------------
# Custom Exceptions
# ----------------------------------------------------------------
class SetupError(Exception):
    """Base exception for setup and uninstall errors."""

    pass


class ValidationError(SetupError):
    """Raised when operator input is missing or malformed."""

    pass


class ExecutionError(SetupError):
    """Raised when command execution fails."""

    pass


class CertificateError(SetupError):
    """Raised when the certificate is missing or unreadable after issuance."""

    pass


class NetworkError(SetupError):
    """Raised when network operations fail."""

    pass
