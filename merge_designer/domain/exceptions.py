"""Domain-specific exceptions."""


class MergeDesignerError(Exception):
    """Base exception for mail-merge designer operations."""
    pass


class ParseError(MergeDesignerError):
    """Raised when an uploaded dataset cannot be read."""
    pass


class ExportError(MergeDesignerError):
    """Raised when a merged document cannot be built."""
    pass


class DocumentValidationError(MergeDesignerError):
    """Raised when a document payload fails validation."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid document")


class ConfigurationError(MergeDesignerError):
    """Raised when configuration is invalid."""
    pass
