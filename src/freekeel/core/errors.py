"""
Errors raised by the load, render and export pipeline
"""


class FreeKeelError(Exception):
    """Base class for application errors"""


class LoadError(FreeKeelError):
    """The bytes could not be opened as a document"""


class PasswordRequired(LoadError):
    """The document is encrypted and no valid password was supplied"""


class ExportError(FreeKeelError):
    """Flattening or serialization failed"""


class NoDocumentLoaded(ExportError):
    """Export was requested before any document was loaded or created"""

    def __init__(self, message: str = "Load a PDF first"):
        super().__init__(message)


class SerializationFailed(ExportError):
    """The mutated document could not be written back to bytes"""
