"""Actionable error catalog for dbexport."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "missing_credentials": {
        "what": "MongoDB credentials not found in environment variables: {missing}.",
        "next": "Export MONGODB_USERNAME and MONGODB_PASSWORD before running the backup.",
    },
    "directory_creation_failed": {
        "what": "Failed to create backup directory in any location ({attempted}).",
        "next": "Run from a writable directory or pass `--output-dir` pointing to one.",
    },
    "tool_not_found": {
        "what": "{tool} command not found!",
        "next": "Install MongoDB Database Tools and make sure `{tool}` is on your PATH.",
    },
    "export_failed": {
        "what": "MongoDB export failed with exit code {exit_code}.",
        "next": "Check the {tool} output, the server address and the credentials.",
    },
    "export_launch_failed": {
        "what": "Could not start {tool}: {reason}",
        "next": "Verify that `{tool}` is installed and executable, then retry.",
    },
    "export_timed_out": {
        "what": "MongoDB export did not finish within {timeout}s.",
        "next": "Increase `--timeout` or check connectivity to the database server.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
