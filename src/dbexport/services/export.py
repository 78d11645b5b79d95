"""Runs mongodump against the resolved server and destination."""

import shutil
from typing import Callable, Optional
from urllib.parse import quote

from dbexport.errors import ExportFailed, ToolNotFound
from dbexport.errors_catalog import actionable_error
from dbexport.models import BackupDestination, Credentials

DEFAULT_TOOL = "mongodump"
AUTH_SOURCE = "admin"

INSTALL_HINTS = [
    "Please install MongoDB Database Tools:",
    "  Ubuntu/Debian: sudo apt-get install mongodb-database-tools",
    "  CentOS/RHEL: sudo yum install mongodb-database-tools",
    "  macOS: brew install mongodb/brew/mongodb-database-tools",
    "  Windows: winget install MongoDB.DatabaseTools",
    "  Or download from: https://www.mongodb.com/try/download/database-tools",
]


def _format_uri(username: str, password: str, host: str, port: str) -> str:
    return f"mongodb://{username}:{password}@{host}:{port}/?authSource={AUTH_SOURCE}"


def build_uri(credentials: Credentials) -> str:
    """Builds the connection string passed to ``--uri``.

    Username and password are percent-encoded so that reserved characters
    such as ``:``, ``@`` and ``/`` cannot break the authority section.
    Alphanumeric credentials come through unchanged.
    """
    return _format_uri(
        quote(credentials.username, safe=""),
        quote(credentials.password, safe=""),
        credentials.host,
        credentials.port,
    )


def redact_uri(credentials: Credentials) -> str:
    return _format_uri(
        quote(credentials.username, safe=""), "****", credentials.host, credentials.port
    )


class ExportInvoker:
    """Locates the dump tool and runs it for one destination."""

    def __init__(
        self,
        command_runner,
        logger,
        tool: str = DEFAULT_TOOL,
        which: Callable[[str], Optional[str]] = shutil.which,
        timeout: Optional[float] = None,
        quiet: bool = False,
    ):
        self.command_runner = command_runner
        self.logger = logger
        self.tool = tool
        self.which = which
        self.timeout = timeout
        self.quiet = quiet

    def locate_tool(self) -> str:
        executable = self.which(self.tool)
        if not executable:
            raise ToolNotFound(actionable_error("tool_not_found", tool=self.tool), hints=INSTALL_HINTS)
        self.logger.debug("Using %s at %s", self.tool, executable)
        return executable

    def build_uri(self, credentials: Credentials) -> str:
        return build_uri(credentials)

    def invoke(self, destination: BackupDestination, credentials: Credentials) -> int:
        executable = self.locate_tool()
        uri = self.build_uri(credentials)

        cmd = [executable, f"--uri={uri}", f"--out={destination.path}"]
        display_cmd = [executable, f"--uri={redact_uri(credentials)}", f"--out={destination.path}"]

        self.logger.info("Starting MongoDB export...")
        self.logger.info("Target directory: %s", destination.path)
        result = self.command_runner.run(
            cmd,
            display_cmd=display_cmd,
            capture_output=self.quiet,
            timeout=self.timeout,
        )

        if result.returncode != 0:
            message = actionable_error(
                "export_failed",
                exit_code=str(result.returncode),
                tool=self.tool,
            )
            tool_output = self._captured_error_output(result, credentials)
            if tool_output:
                message = f"{message}\n{tool_output}"
            raise ExportFailed(message, exit_code=result.returncode)

        self.logger.info("MongoDB export completed successfully!")
        return result.returncode

    def _captured_error_output(self, result, credentials: Credentials) -> str:
        if not self.quiet:
            return ""
        output = (result.stderr or "").strip()
        if credentials.password:
            for secret in {credentials.password, quote(credentials.password, safe="")}:
                output = output.replace(secret, "****")
        return output
