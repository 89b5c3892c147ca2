from pathlib import Path


def describe_stream(stream: object) -> str:
    name = getattr(stream, "name", None)
    if isinstance(name, str) and name:
        return Path(name).name
    return type(stream).__name__
