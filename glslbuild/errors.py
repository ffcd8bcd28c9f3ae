"""
The errors raised by glslbuild.

Configuration problems are raised right away, before any compiler process
is spawned. Problems with a single module are collected by the
orchestrator and raised together as an ``AggregateBuildError`` once every
module has been attempted.
"""


class GlslBuildError(Exception):
    """Base class for all glslbuild errors."""


class ConfigurationError(GlslBuildError, ValueError):
    """The task or one of its modules is not configured correctly."""

    def __init__(self, message, module_name=None):
        if module_name is not None:
            message = f"Shader module '{module_name}': {message}"
        super().__init__(message)
        self.module_name = module_name


class DuplicateModuleNameError(ConfigurationError):
    """A module with the given name was already declared."""

    def __init__(self, module_name):
        super().__init__("a module with this name is already declared.", module_name)


class CompilerNotFoundError(ConfigurationError):
    """The shader compiler executable could not be started."""

    def __init__(self, executable):
        super().__init__(
            f"Shader compiler {executable!r} not found. Install the Vulkan SDK "
            "and make sure glslc is on PATH, or set GLSLBUILD_GLSLC."
        )
        self.executable = executable


class ModuleBuildError(GlslBuildError):
    """Base class for errors that are fatal for a single module only."""

    def __init__(self, message, module_name):
        super().__init__(f"Shader module '{module_name}': {message}")
        self.module_name = module_name


class OutputDirectoryCreationError(ModuleBuildError):
    """The directory for a module's output artifact could not be created."""

    def __init__(self, module_name, directory, reason):
        super().__init__(
            f"could not create output directory {directory!r}: {reason}", module_name
        )
        self.directory = directory
        self.reason = reason


class CompilationFailedError(ModuleBuildError):
    """The compiler exited with a nonzero exit code."""

    def __init__(self, module_name, exit_code, stderr):
        message = f"compiler exited with code {exit_code}"
        if stderr.strip():
            message += ":\n" + stderr.rstrip()
        super().__init__(message, module_name)
        self.exit_code = exit_code
        self.stderr = stderr


class CompilationTimeoutError(CompilationFailedError):
    """The compiler did not finish within the configured timeout."""

    def __init__(self, module_name, timeout, stderr=""):
        ModuleBuildError.__init__(
            self, f"compiler did not finish within {timeout} seconds", module_name
        )
        self.exit_code = None
        self.stderr = stderr
        self.timeout = timeout


class AggregateBuildError(GlslBuildError):
    """One or more modules failed to build.

    The ``errors`` attribute lists the per-module errors in declaration order.
    """

    def __init__(self, errors):
        self.errors = list(errors)
        names = ", ".join(repr(e.module_name) for e in self.errors)
        lines = [f"{len(self.errors)} shader module(s) failed to build: {names}"]
        lines.extend("  " + str(e).replace("\n", "\n  ") for e in self.errors)
        super().__init__("\n".join(lines))

    @property
    def module_names(self):
        """The names of the failed modules, in declaration order."""
        return [e.module_name for e in self.errors]
