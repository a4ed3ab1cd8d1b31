"""
Exception types for VoltAI.

I/O failures are left as the built-in OSError; everything raised here
derives from VoltAIError so callers can catch the whole family.
"""


class VoltAIError(Exception):
    """Base class for all VoltAI errors."""


class IndexFormatError(VoltAIError):
    """A persisted index is malformed or violates its shape invariants."""


class ExtractionError(VoltAIError):
    """Text could not be extracted from a source file."""

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class GenerationError(VoltAIError):
    """The external text-generation process failed or could not be started."""
