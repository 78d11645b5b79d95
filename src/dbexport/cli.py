import logging
import os

import click
from rich.logging import RichHandler

from .core import DatabaseExporter, DbExportError
from .services.config_loader import ConfigLoader
from .services.export import DEFAULT_TOOL

DEFAULT_CONFIG_FILE = ".dbexport.yml"

def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)

@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option(
    "--output-dir",
    required=False,
    type=click.Path(file_okay=False),
    help="Base directory for the backup folder (default: current directory).",
)
@click.option(
    "--dump-tool",
    required=False,
    help=f"Name or path of the dump executable (default: {DEFAULT_TOOL}).",
)
@click.option(
    "--timeout",
    required=False,
    type=float,
    default=None,
    help="Abort the export after this many seconds (default: no timeout).",
)
@click.option("--quiet", is_flag=True, default=None, help="Hide the dump tool's console output.")
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(config, output_dir, dump_tool, timeout, quiet, verbose, log_file):
    """Back up a MongoDB server into a timestamped directory using mongodump.

    Credentials are read from MONGODB_USERNAME and MONGODB_PASSWORD. The server
    address comes from MONGODB_HOST and MONGODB_PORT (defaults: 192.168.1.10
    and 27018).
    """
    logger = logging.getLogger("dbexport")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except DbExportError as exc:
        raise click.ClickException(str(exc)) from exc

    output_dir = _resolve_option(output_dir, config_values, "output_dir")
    dump_tool = str(_resolve_option(dump_tool, config_values, "dump_tool", default=DEFAULT_TOOL))
    timeout = _resolve_option(timeout, config_values, "timeout")
    quiet = bool(_resolve_option(quiet, config_values, "quiet", default=False))
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    try:
        exporter = DatabaseExporter(
            output_dir=output_dir,
            dump_tool=dump_tool,
            timeout=timeout,
            quiet=quiet,
        )
    except DbExportError as exc:
        raise click.ClickException(str(exc)) from exc

    raise SystemExit(exporter.run())

if __name__ == "__main__":
    main()
