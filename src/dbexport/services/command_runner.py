"""Subprocess execution service for dbexport."""

import subprocess
from typing import List, Optional

from dbexport.errors import ExportFailed
from dbexport.errors_catalog import actionable_error


class CommandRunner:
    """Runs external commands with consistent error handling."""

    def __init__(self, logger, default_timeout: Optional[float] = None):
        self.logger = logger
        self.default_timeout = default_timeout

    def run(
        self,
        cmd: List[str],
        display_cmd: Optional[List[str]] = None,
        capture_output: bool = False,
        timeout: Optional[float] = None,
    ) -> subprocess.CompletedProcess:
        cmd_str = " ".join(display_cmd or cmd)
        self.logger.debug("Executing: %s", cmd_str)

        effective_timeout = timeout if timeout is not None else self.default_timeout

        try:
            result = subprocess.run(
                cmd,
                text=True,
                capture_output=capture_output,
                timeout=effective_timeout,
            )
        except FileNotFoundError as exc:
            raise ExportFailed(
                actionable_error("export_launch_failed", tool=cmd[0], reason="command not found")
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ExportFailed(
                actionable_error("export_timed_out", timeout=str(effective_timeout))
            ) from exc
        except OSError as exc:
            raise ExportFailed(
                actionable_error("export_launch_failed", tool=cmd[0], reason=str(exc))
            ) from exc

        if capture_output:
            if result.stdout:
                self.logger.debug("Command output: %s", result.stdout.strip())
            if result.stderr:
                self.logger.debug("Command error output: %s", result.stderr.strip())

        if result.returncode != 0:
            self.logger.debug("Command exited with %s: %s", result.returncode, cmd_str)

        return result
