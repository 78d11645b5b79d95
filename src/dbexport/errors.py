"""Domain errors for dbexport."""

from typing import Iterable, Optional


class DbExportError(RuntimeError):
    """Raised when the export cannot continue safely."""

    def __init__(self, message: str, hints: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.hints = list(hints or [])


class MissingCredentials(DbExportError):
    """Raised when the database username or password is not configured."""


class DirectoryCreationFailed(DbExportError):
    """Raised when no candidate location accepts the backup directory."""


class ToolNotFound(DbExportError):
    """Raised when the dump executable cannot be found on PATH."""


class ExportFailed(DbExportError):
    """Raised when the dump tool cannot be launched or exits with an error."""

    def __init__(
        self,
        message: str,
        exit_code: Optional[int] = None,
        hints: Optional[Iterable[str]] = None,
    ):
        super().__init__(message, hints=hints)
        self.exit_code = exit_code
