"""
dbexport - timestamped MongoDB backups through mongodump
"""

__version__ = "0.1.0"

from .core import DatabaseExporter
from .errors import DbExportError

__all__ = ["DatabaseExporter", "DbExportError"]
