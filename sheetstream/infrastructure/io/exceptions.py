class SheetStreamError(Exception):
    pass


class DataSourceError(SheetStreamError):
    pass


class DataSourceNotFoundError(DataSourceError):
    pass


class StreamError(DataSourceError):
    pass


class DataParseError(DataSourceError):
    pass


class DataValidationError(DataSourceError):
    pass


class RecordFormatError(DataSourceError):
    pass


class ScannerSignalError(SheetStreamError):
    """Error delivered through a scanner's ``error`` signal.

    Instances are handed to signal handlers, never raised by the scanner.
    """
