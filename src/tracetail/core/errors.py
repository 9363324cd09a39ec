"""Exception types raised by tracetail."""


class TracetailError(Exception):
    """Base class for all tracetail errors."""


class FilterParseError(TracetailError, ValueError):
    """Raised when filter text does not follow the filter grammar.

    Attributes:
        text: The filter text that failed to parse.
        position: Character offset in ``text`` where the problem was found.
        reason: Short description of the problem.
    """

    def __init__(self, reason: str, text: str, position: int) -> None:
        super().__init__(f"{reason} at position {position} in filter {text!r}")
        self.reason = reason
        self.text = text
        self.position = position


class PoisonedBufferError(TracetailError, RuntimeError):
    """Raised by every operation on an event buffer whose state may be corrupt.

    A buffer is poisoned when an exception escapes one of its critical
    sections. The original failure is available as ``__cause__``.
    """
