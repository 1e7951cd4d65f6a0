"""
Custom exception classes for md2docx converter.
"""


class Md2DocxError(Exception):
    """Base exception for all md2docx errors."""
    pass


class ConversionError(Md2DocxError):
    """Error during markdown-to-DOCX conversion."""
    pass


class UnsupportedConstructError(ConversionError):
    """The input tree contains a node variant the converter does not handle."""

    def __init__(self, kind, context=None):
        self.kind = kind
        message = f"Unsupported markdown construct: {kind}"
        if context:
            message += f" (inside {context})"
        super().__init__(message)


class MalformedInputError(ConversionError):
    """The input tree violates a structural rule (list start, item shape, table columns)."""
    pass


class ResourceUnavailableError(ConversionError):
    """A referenced resource (image file) could not be read."""

    def __init__(self, path, message=None):
        self.path = path
        super().__init__(message or f"Image not found: {path}")


class InvalidOverrideError(Md2DocxError):
    """A style override has a wrong type or an unrecognized value."""

    def __init__(self, style_id, key, message):
        self.style_id = style_id
        self.key = key
        super().__init__(f"Invalid override [{style_id}].{key}: {message}")


class StyleFileError(Md2DocxError):
    """Error related to reading or parsing the TOML style file."""
    pass
