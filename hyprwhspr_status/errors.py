"""Error taxonomy for the status and history publication subsystem."""


class StatusPublicationError(Exception):
    """Base class for all publication errors."""


class WriteError(StatusPublicationError):
    """Writing a document (or creating its directory) failed.

    The previous file content is left untouched.
    """

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class HistoryParseError(StatusPublicationError):
    """An existing document could not be parsed."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class PathResolutionError(StatusPublicationError):
    """Neither the XDG location nor the /tmp fallback is usable."""
