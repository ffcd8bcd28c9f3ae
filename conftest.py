"""Global configuration for pytest"""

import pytest


class FakeRunner:
    """A compiler runner that records invocations instead of spawning processes.

    ``results`` maps a module's source file name to the ``(exit_code, stderr)``
    to return for it. Successful invocations write the output file, like
    glslc would.
    """

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def execute(self, argv):
        self.calls.append(list(argv))
        source = argv[-1].replace("\\", "/").rsplit("/", 1)[-1]
        exit_code, stderr = self.results.get(source, (0, ""))
        if exit_code == 0:
            output = [a for a in argv if a.startswith("-o")][0][2:]
            with open(output, "wb") as f:
                f.write(b"\x03\x02\x23\x07")
        return exit_code, stderr


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture(autouse=True)
def no_env_compiler(monkeypatch):
    """Make sure the user's environment does not leak into the tests."""
    monkeypatch.delenv("GLSLBUILD_GLSLC", raising=False)
