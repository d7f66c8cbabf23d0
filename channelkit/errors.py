"""Error taxonomy for welcome channel synchronization.

Every error keeps the exception it wraps as ``cause`` (and ``__cause__``)
so the failure reporter can show the original problem.
"""

from typing import Optional


class ChannelKitError(Exception):
    """Base exception for channelkit errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}\n\n>>> {self.cause}"
        return self.message


class BlockValidationError(ChannelKitError):
    """A block definition is malformed; the whole fetch is aborted."""

    def __init__(self, message: str, index: Optional[int] = None, cause: Optional[BaseException] = None):
        super().__init__(message, cause)
        self.index = index


class FetchError(ChannelKitError):
    """Downloading the block document failed (transport or HTTP status)."""

    def __init__(
        self,
        message: str,
        url: str = "",
        status: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause)
        self.url = url
        self.status = status


class ParseError(ChannelKitError):
    """The block document is not valid YAML or has the wrong shape."""


class PlatformApiError(ChannelKitError):
    """A chat platform call (list/create/edit/delete) failed."""

    def __init__(self, message: str, status: Optional[int] = None, cause: Optional[BaseException] = None):
        super().__init__(message, cause)
        self.status = status


class NotFoundIgnorable(PlatformApiError):
    """The target message is already gone; safe to suppress on delete."""

    def __init__(self, message: str = "Unknown message", cause: Optional[BaseException] = None):
        super().__init__(message, status=404, cause=cause)
