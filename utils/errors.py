"""Custom exception types for the Voicecraft studio."""

class StudioError(Exception):
    """Base class for exceptions in Voicecraft."""
    pass

class DomainError(StudioError):
    """Exception raised for errors related to text processing rules."""
    pass

class InfrastructureError(StudioError):
    """Exception raised for errors in external collaborators (e.g., speech providers)."""
    pass

class ValidationError(DomainError):
    """Exception raised when caller-supplied input is missing, empty or out of bounds."""
    pass

class UnsupportedFileTypeError(ValidationError):
    """Exception raised when an uploaded file has a content type we cannot extract text from."""
    pass

class FileTooLargeError(ValidationError):
    """Exception raised when an uploaded file exceeds the configured size limit."""
    pass

class SynthesisError(InfrastructureError):
    """Exception raised when the speech provider fails to produce audio."""
    pass
