import io

import pytest

from minilisp.interpreter import Interpreter


@pytest.fixture(autouse=True)
def _no_prelude_from_env(monkeypatch):
    # A prelude configured in the developer's shell must not leak into tests
    monkeypatch.delenv("MINILISP_PRELUDE", raising=False)
    monkeypatch.delenv("MINILISP_SOURCE_ENCODING", raising=False)


@pytest.fixture
def stdout():
    return io.StringIO()


@pytest.fixture
def lisp(stdout):
    """A fresh interpreter whose print output goes to the `stdout` fixture."""
    return Interpreter(stdout=stdout)
