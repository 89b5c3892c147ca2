from typing import ClassVar


class Defaults:
    ENCODING = "utf-8"
    MAX_BUFFER_SIZE = 1024 * 1024
    CHUNK_SIZE = 64 * 1024
    BATCH_SIZE = 1000
    LINE_DELIMITER = r"\r?\n"
    DATE_FORMATS: ClassVar[tuple[str, ...]] = (
        "%Y-%m-%dT%H:%M:%S%z",
        "%Y-%m-%dT%H:%M:%S",
        "%Y-%m-%dT%H:%M:%S.%f%z",
        "%Y-%m-%dT%H:%M:%S.%f",
        "%m-%d-%Y",
        "%Y-%m-%d",
    )
    CONFIG_FILE = "sheetstream.toml"


class SpecialValues:
    TRUE = "true"
    FALSE = "false"
    ERROR_CODES: ClassVar[tuple[str, ...]] = (
        "#N/A",
        "#REF!",
        "#NAME?",
        "#DIV/0!",
        "#NULL!",
        "#VALUE!",
        "#NUM!",
    )


class Patterns:
    DECIMAL_NUMBER = r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$"
    INTEGER_NUMBER = r"^[+-]?\d+$"
    TZ_COLON_SUFFIX = r"([+-]\d{2}):(\d{2})$"
