"""Backup directory naming and placement."""

import os
import sys
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from rich.markup import escape

from dbexport.errors import DirectoryCreationFailed
from dbexport.errors_catalog import actionable_error
from dbexport.models import BackupDestination

DIRECTORY_PREFIX = "dbbackup-"
DIRECTORY_SUFFIX = "-qos-bigmenu"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def build_directory_name(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"{DIRECTORY_PREFIX}{now.strftime(TIMESTAMP_FORMAT)}{DIRECTORY_SUFFIX}"


class PlatformLocations:
    """Candidate base directories: working directory first, then Desktop or home."""

    def __init__(self, cwd: Optional[str] = None, home: Optional[str] = None):
        self.cwd = cwd
        self.home = home

    def primary_base(self) -> str:
        return self.cwd or os.getcwd()

    def fallback_base(self) -> str:
        home = self.home or os.path.expanduser("~")
        for desktop in self._desktop_dirs(home):
            if os.path.isdir(desktop):
                return desktop
        return home

    def candidates(self) -> List[str]:
        return [self.primary_base(), self.fallback_base()]

    def _desktop_dirs(self, home: str) -> List[str]:
        return [os.path.join(home, "Desktop")]


class WindowsLocations(PlatformLocations):
    """Also honours a Desktop redirected into OneDrive."""

    def _desktop_dirs(self, home: str) -> List[str]:
        desktops = []
        onedrive = os.environ.get("OneDrive")
        if onedrive:
            desktops.append(os.path.join(onedrive, "Desktop"))
        desktops.append(os.path.join(home, "Desktop"))
        return desktops


def default_locations(base_dir: Optional[str] = None) -> PlatformLocations:
    if sys.platform == "win32":
        return WindowsLocations(cwd=base_dir)
    return PlatformLocations(cwd=base_dir)


class DestinationSelector:
    """Creates the backup directory in the first base that accepts it."""

    def __init__(self, logger, console, makedirs: Callable = os.makedirs):
        self.logger = logger
        self.console = console
        self.makedirs = makedirs

    def select(
        self,
        candidates: Sequence[str],
        name_builder: Callable[[], str] = build_directory_name,
    ) -> BackupDestination:
        name = name_builder()
        attempted: List[str] = []

        for index, base in enumerate(candidates):
            path = os.path.abspath(os.path.join(base, name))
            attempted.append(path)
            existed = os.path.isdir(path)

            try:
                self.makedirs(path, exist_ok=True)
            except OSError as exc:
                self.logger.warning("Cannot create backup directory %s: %s", path, exc)
                self._announce_fallback(base, index, len(candidates))
                continue

            if not os.access(path, os.W_OK):
                self.logger.warning("Backup directory %s is not writable.", path)
                self._announce_fallback(base, index, len(candidates))
                continue

            if existed:
                self.logger.warning(
                    "Backup directory %s already exists. Another run may be using it.", path
                )
                self.console.print(
                    f"[yellow]Using existing backup directory: {escape(path)}[/yellow]"
                )
            else:
                self.console.print(f"[green]Created backup directory: {escape(path)}[/green]")
            self.logger.info("Selected backup directory: %s", path)
            return BackupDestination(path=path, created=not existed)

        raise DirectoryCreationFailed(
            actionable_error("directory_creation_failed", attempted=", ".join(attempted) or "none")
        )

    def _announce_fallback(self, base: str, index: int, total: int):
        if index + 1 < total:
            self.console.print(
                f"[yellow]Cannot create directory in {escape(base)}. Trying next location...[/yellow]"
            )
