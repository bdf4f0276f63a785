"""Domain-specific exceptions for documents services."""


class DocumentServiceError(Exception):
    """Base exception for documents services."""
    pass


class DocumentNotFoundError(DocumentServiceError):
    """Raised when document does not exist in the project."""
    pass


class InvalidDocumentError(DocumentServiceError):
    """Raised when an upload has no file or an unknown type."""
    pass
