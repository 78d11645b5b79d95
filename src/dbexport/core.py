import logging
import os
import shutil
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape

from .errors import DbExportError
from .models import ExportResult
from .services.command_runner import CommandRunner
from .services.config_provider import ConfigProvider, EnvironmentConfigProvider
from .services.credentials import CredentialResolver
from .services.destination import (
    DestinationSelector,
    PlatformLocations,
    build_directory_name,
    default_locations,
)
from .services.export import DEFAULT_TOOL, ExportInvoker
from .services.report import ResultReporter

console = Console()
logger = logging.getLogger("dbexport")


class DatabaseExporter:
    """Runs one backup: tool check, credentials, destination, export, report."""

    def __init__(
        self,
        output_dir: Optional[str] = None,
        dump_tool: str = DEFAULT_TOOL,
        timeout: Optional[float] = None,
        quiet: bool = False,
        config_provider: Optional[ConfigProvider] = None,
        locations: Optional[PlatformLocations] = None,
        command_runner: Optional[CommandRunner] = None,
        which: Callable[[str], Optional[str]] = shutil.which,
        name_builder: Callable[[], str] = build_directory_name,
        makedirs: Callable = os.makedirs,
    ):
        if timeout is not None and timeout <= 0:
            raise DbExportError("--timeout must be a positive number of seconds.")
        if not dump_tool:
            raise DbExportError("--dump-tool must not be empty.")

        self.output_dir = output_dir
        self.dump_tool = dump_tool
        self.timeout = timeout
        self.quiet = quiet
        self.name_builder = name_builder

        self.config_provider = config_provider or EnvironmentConfigProvider()
        self.locations = locations or default_locations(output_dir)
        self.command_runner = command_runner or CommandRunner(logger=logger, default_timeout=timeout)

        self.export_invoker = ExportInvoker(
            command_runner=self.command_runner,
            logger=logger,
            tool=dump_tool,
            timeout=timeout,
            quiet=quiet,
            which=which,
        )
        self.credential_resolver = CredentialResolver(self.config_provider, logger=logger)
        self.destination_selector = DestinationSelector(
            logger=logger,
            console=console,
            makedirs=makedirs,
        )
        self.reporter = ResultReporter(logger=logger, console=console)

    def candidates(self) -> List[str]:
        return self.locations.candidates()

    def run(self) -> int:
        try:
            console.print("[bold blue]MongoDB Database Export[/bold blue]")
            logger.info("Starting dbexport...")

            self.export_invoker.locate_tool()
            credentials = self.credential_resolver.resolve()
            destination = self.destination_selector.select(self.candidates(), self.name_builder)
            exit_code = self.export_invoker.invoke(destination, credentials)

            self.reporter.report(ExportResult(exit_code=exit_code, destination=destination))
            return 0

        except KeyboardInterrupt:
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except DbExportError as exc:
            self.reporter.report_failure(exc)
            return 1
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(exc))}")
            logger.exception("Unexpected error")
            return 1
