"""Shared domain models for dbexport."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Credentials:
    """Connection settings resolved once per run. Never persisted."""

    username: str
    password: str = field(repr=False)
    host: str = "192.168.1.10"
    port: str = "27018"


@dataclass(frozen=True)
class BackupDestination:
    """Backup directory chosen for this run; `created` is False when it already existed."""

    path: str
    created: bool


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a successful dump, handed to the reporter."""

    exit_code: int
    destination: BackupDestination


@dataclass(frozen=True)
class DirectoryEntry:
    """One immediate child of the backup directory."""

    name: str
    size: int
    modified: datetime
    is_dir: bool
