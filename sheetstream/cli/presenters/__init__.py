"""Presenters for CLI output formatting.

Presenter classes turn tables and batch statistics into rich console output.
"""

from .progress import BatchProgressPresenter
from .rows import RowsPresenter

__all__ = ["BatchProgressPresenter", "RowsPresenter"]
