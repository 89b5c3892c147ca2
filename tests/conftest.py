import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_sheetstream_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SHEETSTREAM_* variables from the developer's shell out of tests.

    Configuration defaults are asserted directly in several suites, so any
    override exported in the environment would make them flaky.
    """
    for key in list(os.environ):
        if key.startswith("SHEETSTREAM_"):
            monkeypatch.delenv(key, raising=False)
