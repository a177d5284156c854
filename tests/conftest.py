import os

import pytest

from playscript.playscript_eval import Interpreter

# subprocess-based CLI tests report coverage only when the hook is enabled
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


@pytest.fixture  # type: ignore[misc]
def interpreter() -> Interpreter:
    return Interpreter()
