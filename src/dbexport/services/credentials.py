"""Credential resolution for dbexport."""

from typing import List

from dbexport.errors import MissingCredentials
from dbexport.errors_catalog import actionable_error
from dbexport.models import Credentials
from dbexport.services.config_provider import ConfigProvider

USERNAME_VAR = "MONGODB_USERNAME"
PASSWORD_VAR = "MONGODB_PASSWORD"
HOST_VAR = "MONGODB_HOST"
PORT_VAR = "MONGODB_PORT"

DEFAULT_HOST = "192.168.1.10"
DEFAULT_PORT = "27018"

SETUP_HINTS = [
    "Please set the following environment variables:",
    f"  export {USERNAME_VAR}=your_username",
    f"  export {PASSWORD_VAR}=your_password",
    f"  export {HOST_VAR}=your_host (default: {DEFAULT_HOST})",
    f"  export {PORT_VAR}=your_port (default: {DEFAULT_PORT})",
    "For security, you can add these to your ~/.bashrc or ~/.profile and run `source ~/.bashrc`.",
]


class CredentialResolver:
    """Builds connection credentials from a configuration provider."""

    def __init__(self, config_provider: ConfigProvider, logger):
        self.config_provider = config_provider
        self.logger = logger

    def resolve(self) -> Credentials:
        username = self.config_provider.get(USERNAME_VAR)
        password = self.config_provider.get(PASSWORD_VAR)

        missing: List[str] = []
        if username is None:
            missing.append(USERNAME_VAR)
        if password is None:
            missing.append(PASSWORD_VAR)
        if missing:
            raise MissingCredentials(
                actionable_error("missing_credentials", missing=", ".join(missing)),
                hints=SETUP_HINTS,
            )

        host = self.config_provider.get(HOST_VAR)
        if host is None:
            self.logger.debug("%s not set, using default host %s", HOST_VAR, DEFAULT_HOST)
            host = DEFAULT_HOST

        port = self.config_provider.get(PORT_VAR)
        if port is None:
            self.logger.debug("%s not set, using default port %s", PORT_VAR, DEFAULT_PORT)
            port = DEFAULT_PORT

        self.logger.debug("Resolved credentials from %s and %s", USERNAME_VAR, PASSWORD_VAR)
        return Credentials(username=username, password=password, host=host, port=port)
