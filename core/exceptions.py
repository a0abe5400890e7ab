# core/exceptions.py
from typing import Optional


class TouchstoneError(Exception):
    """Base exception for Touchstone reader errors."""
    pass


class InvalidTouchstoneDataError(TouchstoneError):
    """
    Raised when a Touchstone file violates the format.

    Attributes:
        section: "Options", "Keywords" or "Data".
        message: Short description of the violation.
        line_number: 1-based line at which parsing failed.
    """
    def __init__(self, section: str, message: Optional[str] = None, line_number: int = 0):
        self.section = section
        self.message = message
        self.line_number = line_number
        text = f"Invalid data format parsing section {section} at line {line_number}."
        if message:
            text += f' Parser returned message "{message}".'
        super().__init__(text)


class TouchstoneNotSupportedError(TouchstoneError, NotImplementedError):
    """Raised for constructs that are recognised but not handled by the reader."""
    pass


class ParseCancelledError(TouchstoneError):
    """Raised when a cancellation token is triggered while reading network data."""
    pass
