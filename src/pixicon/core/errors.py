"""Error types raised while parsing identicon requests and rendering.

Every error carries the HTTP status it maps to and a one-line message.  The
API layer turns them into ``error: <message>`` plain-text responses; the CLI
prints the message to stderr.  None of them are retried: they are a
deterministic function of the request.
"""


class PixiconError(Exception):
    """Base class for user-facing identicon errors.

    The message is intended to be displayed directly to the caller.
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidSizeFormatError(PixiconError):
    """The size parameter is not an integer."""

    def __init__(self) -> None:
        super().__init__("invalid size")


class InvalidSizeError(PixiconError):
    """The size is not a positive multiple of 8."""

    def __init__(self) -> None:
        super().__init__("size must be a multiple of 8")


class UnsupportedFormatError(PixiconError):
    """The path extension does not name a supported output format."""

    status_code = 404

    def __init__(self) -> None:
        super().__init__("unsupported file format")


class UnsupportedMirrorAxisError(PixiconError):
    """A mirror axis other than ``x`` or ``y`` was requested."""

    def __init__(self, axis: str) -> None:
        super().__init__(f"unsupported mirror axis: {axis}")
        self.axis = axis


class DuplicateMirrorAxisError(PixiconError):
    """The same mirror axis was requested twice."""

    def __init__(self, axis: str) -> None:
        super().__init__(f"duplicate mirror axis: {axis}")
        self.axis = axis


class MethodNotAllowedError(PixiconError):
    """Only GET is served."""

    status_code = 405
    allowed = "GET"

    def __init__(self, method: str) -> None:
        super().__init__("method not allowed")
        self.method = method
