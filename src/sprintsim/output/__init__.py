"""Output formatting and export."""

from .console import ConsoleOutput, format_time, ordinal
from .export import Exporter

__all__ = ["ConsoleOutput", "Exporter", "format_time", "ordinal"]
