"""
The shader compile task.

``CompileShaders`` turns a set of declared shader modules into compiler
invocations. All module paths are expressed relative to the task's base
directory. The base directory itself is anchored to either the source
root or the build output root, and is resolved when the task runs::

    task = CompileShaders("debug")
    task.add_module("ApplyVert", lambda m: m.set_source("apply.vert").set_output("apply_vert.spv"))
    task.run("/proj", "/proj/build")

This runs ``glslc -I/proj/debug -o/proj/build/debug/apply_vert.spv /proj/debug/apply.vert``.

Path resolution works as follows:

* The include root is the base directory, resolved through its anchor.
* A module's source is ``base_dir / module.source``, resolved through the
  anchor of the base directory (the composed path inherits it).
* A module's output is ``base_dir / module.output``, always placed in the
  build output tree.

Every module is compiled independently. When modules fail, the remaining
modules are still compiled, and an ``AggregateBuildError`` listing all
failures is raised at the end.
"""

import os
import subprocess
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from .compiler import GlslcRunner
from .errors import (
    AggregateBuildError,
    CompilationFailedError,
    CompilationTimeoutError,
    ConfigurationError,
    ModuleBuildError,
    OutputDirectoryCreationError,
)
from .modules import ModuleRegistry
from .paths import RelativePath
from .utils import logger, assert_type
from .utils.enums import stage_flag


CompileResult = namedtuple("CompileResult", ["module_name", "argv", "output"])


class CompileShaders:
    """A task that compiles a set of shader modules with glslc.

    Parameters
    ----------
    base_dir : RelativePath | str | None
        The directory that all module paths are relative to. A string is
        taken to be relative to the source root. Must be set before running.
    runner : object | None
        The object used to invoke the compiler, see ``glslbuild.compiler``.
        Defaults to a ``GlslcRunner``.
    name : str | None
        A name for this task, used in log messages.
    """

    def __init__(self, base_dir=None, *, runner=None, name=None):
        self._base_dir = None
        self._include_dirs = {}  # ordered set
        self._modules = ModuleRegistry()
        self._runner = None
        self.runner = runner
        self._name = name or "compileShaders"
        if base_dir is not None:
            self.base_dir = base_dir

    def __repr__(self):
        return f"<CompileShaders {self._name!r} base_dir={self._base_dir!r} modules={self._modules.names()}>"

    @property
    def name(self):
        """The name of this task."""
        return self._name

    @property
    def base_dir(self):
        """The directory that module paths are relative to."""
        return self._base_dir

    @base_dir.setter
    def base_dir(self, value):
        if isinstance(value, str):
            value = RelativePath.source(value)
        assert_type("base_dir", value, None, RelativePath)
        self._base_dir = value

    @property
    def modules(self):
        """The ``ModuleRegistry`` holding the modules of this task."""
        return self._modules

    @property
    def include_dirs(self):
        """The extra include directories, in the order they were added."""
        return tuple(self._include_dirs)

    @property
    def runner(self):
        """The object used to invoke the compiler."""
        if self._runner is None:
            self._runner = GlslcRunner()
        return self._runner

    @runner.setter
    def runner(self, runner):
        if runner is not None and not callable(getattr(runner, "execute", None)):
            raise TypeError(
                f"Compiler runner must have an execute() method: {runner!r}"
            )
        self._runner = runner

    def include(self, directory):
        """Add an include directory.

        A relative directory is taken relative to the source root. Adding
        the same directory twice has no effect.
        """
        directory = os.fspath(directory)
        assert_type("directory", directory, str)
        self._include_dirs[directory] = None

    def add_module(self, name, action=None):
        """Declare a module, optionally configuring it with ``action(module)``."""
        return self._modules.declare(name, action)

    # %% Argument construction

    def _resolve_include_dirs(self, source_root):
        # Different spellings of the same directory collapse into one
        paths = (
            os.path.normpath(os.path.join(source_root, d)) for d in self._include_dirs
        )
        return list(dict.fromkeys(paths))

    def module_paths(self, module, source_root, build_root):
        """Get the absolute ``(include_root, source, output)`` paths for a module."""
        base = self._base_dir
        include_root = base.resolve(source_root, build_root)
        source = base.compose(module.source).resolve(source_root, build_root)
        output = base.compose(module.output).join_to(build_root)
        return include_root, source, output

    def build_args(self, module, source_root, build_root):
        """Get the compiler arguments for the given module.

        The arguments are ``[stage-flag?, -I<base>, -I<include>..., -o<output>, <source>]``,
        with the stage flag omitted for "auto". This does no I/O.
        """
        include_root, source, output = self.module_paths(
            module, source_root, build_root
        )

        args = []
        flag = stage_flag(module.stage)
        if flag:
            args.append(flag)
        args.append(f"-I{include_root}")
        for include_dir in self._resolve_include_dirs(source_root):
            args.append(f"-I{include_dir}")
        args.append(f"-o{output}")
        args.append(source)
        return args

    # %% Running

    def validate(self, source_root):
        """Check the configuration, raising ConfigurationError on the first problem."""
        if self._base_dir is None:
            raise ConfigurationError(f"Task '{self._name}' has no base directory set.")
        for module in self._modules:
            module.validate()
        for include_dir in self._resolve_include_dirs(source_root):
            if not os.path.isdir(include_dir):
                raise ConfigurationError(
                    f"Task '{self._name}': include directory {include_dir!r} does not exist."
                )

    def run(self, source_root, build_root, jobs=1):
        """Compile all modules.

        Parameters
        ----------
        source_root : str | os.PathLike
            The root of the source tree.
        build_root : str | os.PathLike
            The root of the build output tree.
        jobs : int
            The number of modules to compile in parallel. Default 1.

        Returns a list of ``CompileResult`` in declaration order. Raises
        ``ConfigurationError`` before compiling anything if the task is
        misconfigured, and ``AggregateBuildError`` after all modules have been
        attempted if any of them failed.
        """
        source_root = os.path.abspath(os.fspath(source_root))
        build_root = os.path.abspath(os.fspath(build_root))
        if not (isinstance(jobs, int) and jobs >= 1):
            raise ValueError(f"jobs must be a positive int, not {jobs!r}")

        self.validate(source_root)
        self._modules.seal()
        runner = self.runner

        modules = self._modules.all()
        logger.info(f"Task '{self._name}': compiling {len(modules)} shader module(s)")

        def compile_one(module):
            return self._compile_module(runner, module, source_root, build_root)

        if jobs > 1 and len(modules) > 1:
            with ThreadPoolExecutor(max_workers=jobs) as pool:
                outcomes = list(pool.map(compile_one, modules))
        else:
            outcomes = [compile_one(module) for module in modules]

        errors = [x for x in outcomes if isinstance(x, ModuleBuildError)]
        if errors:
            raise AggregateBuildError(errors)
        return outcomes

    def _compile_module(self, runner, module, source_root, build_root):
        # Returns a CompileResult, or the ModuleBuildError for this module.
        argv = self.build_args(module, source_root, build_root)
        output = self.module_paths(module, source_root, build_root)[2]

        directory = os.path.dirname(output)
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as err:
            error = OutputDirectoryCreationError(
                module.name, directory, err.strerror or str(err)
            )
            logger.error(str(error))
            return error

        logger.info(f"Compiling shader module '{module.name}' -> {output}")
        logger.debug("Compiler arguments: " + " ".join(argv))
        try:
            exit_code, stderr = runner.execute(argv)
        except subprocess.TimeoutExpired as err:
            stderr = err.stderr or b""
            if isinstance(stderr, bytes):
                stderr = stderr.decode(errors="replace")
            error = CompilationTimeoutError(module.name, err.timeout, stderr)
            logger.error(str(error))
            return error

        if exit_code != 0:
            error = CompilationFailedError(module.name, exit_code, stderr or "")
            logger.error(str(error))
            return error
        if stderr and stderr.strip():
            logger.warning(f"Shader module '{module.name}':\n{stderr.rstrip()}")
        return CompileResult(module.name, argv, output)
