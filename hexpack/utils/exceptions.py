"""Exception types shared by the versioning, archiving and packaging contexts."""

from pathlib import Path
from typing import Optional, Sequence


class PackagingError(Exception):
    """
    Base class for errors that abort a packaging run.

    Attributes:
        message: Error description
        path: File or directory the error relates to (if any)
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path

        parts = [message]
        if path is not None:
            parts.append(f"Path: {path}")

        super().__init__("\n".join(parts))


class SourceNotFoundError(PackagingError, FileNotFoundError):
    """Raised when the executable or a package item does not exist."""

    pass


class PackagingIOError(PackagingError, OSError):
    """
    Raised when the archive cannot be created, written or finalized.

    Attributes:
        original_error: The underlying OSError
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        if original_error is not None:
            message = f"{message}: {original_error}"
        super().__init__(message, path)


class VersionDecodeError(PackagingError, ValueError):
    """
    Raised when a version resource block is present but cannot be decoded.

    Fatal: the archive name depends on the version, so packaging stops here.
    """

    pass


class UnknownPlatformError(PackagingError, ValueError):
    """
    Raised when a platform selector does not name a supported platform.

    Attributes:
        selector: The value that was given (None when missing)
        choices: The recognized selectors
    """

    def __init__(self, selector: Optional[str], choices: Sequence[str]):
        self.selector = selector
        self.choices = list(choices)

        if selector is None:
            message = "No platform given"
        else:
            message = f"Unknown platform '{selector}'"
        super().__init__(f"{message}. Expected one of: {', '.join(self.choices)}")
