"""Port interfaces for external collaborators.

Protocols implemented by loggers, workbook sources and batch sinks.
"""

from .services import BatchSinkPort, LoggerPort, WorkbookPort, WorksheetPort

__all__ = ["BatchSinkPort", "LoggerPort", "WorkbookPort", "WorksheetPort"]
