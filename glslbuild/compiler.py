"""
Running the external shader compiler.

The orchestrator only needs one thing from the compiler: run it with a
list of arguments and report the exit code and the standard error
output. Any object with an ``execute(argv)`` method that returns
``(exit_code, stderr)`` can be used as a runner. ``GlslcRunner`` is the
implementation that spawns a real process.
"""

import os
import shutil
import subprocess

from .errors import CompilerNotFoundError


DEFAULT_COMPILER = "glslc"


def find_compiler(executable=None):
    """Get the compiler executable to use.

    The given ``executable`` takes precedence, then the ``GLSLBUILD_GLSLC``
    environment variable, then glslc on PATH. When the executable cannot be
    found on PATH the name is returned as is, and the failure surfaces when
    the process is started.
    """
    executable = executable or os.getenv("GLSLBUILD_GLSLC", "") or DEFAULT_COMPILER
    return shutil.which(executable) or executable


class GlslcRunner:
    """Run the shader compiler as a child process.

    Parameters
    ----------
    executable : str | None
        The compiler executable. See ``find_compiler()``.
    timeout : float | None
        The maximum number of seconds a single invocation may take. None
        (default) means wait forever.
    """

    def __init__(self, executable=None, timeout=None):
        if timeout is not None and timeout <= 0:
            raise ValueError(f"GlslcRunner timeout must be positive, not {timeout!r}")
        self._executable = find_compiler(executable)
        self._timeout = timeout

    def __repr__(self):
        return f"<GlslcRunner {self._executable!r} timeout={self._timeout}>"

    @property
    def executable(self):
        """The compiler executable."""
        return self._executable

    @property
    def timeout(self):
        """The timeout per invocation in seconds, or None."""
        return self._timeout

    def execute(self, argv):
        """Run the compiler with the given arguments and wait for it.

        Returns a tuple ``(exit_code, stderr)``. Raises
        ``subprocess.TimeoutExpired`` when the timeout is exceeded (the child
        is killed), and ``CompilerNotFoundError`` when the executable
        cannot be started.
        """
        command = [self._executable, *argv]
        try:
            p = subprocess.run(command, capture_output=True, timeout=self._timeout)
        except FileNotFoundError:
            raise CompilerNotFoundError(self._executable) from None
        return p.returncode, p.stderr.decode(errors="replace")
