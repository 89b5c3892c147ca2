from typing_extensions import override

from ...application.ports.services import LoggerPort


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_read_start(self, source_name: str, sheet_name: str | None) -> None:
        return None

    @override
    def log_read_complete(
        self, source_name: str, row_count: int, line_count: int
    ) -> None:
        return None

    @override
    def log_batch_delivered(self, batch_number: int, batch_size: int) -> None:
        return None

    @override
    def log_write_complete(
        self, destination_name: str, sheet_count: int, row_count: int
    ) -> None:
        return None
