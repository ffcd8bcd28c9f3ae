"""Compile declared GLSL shader modules to SPIR-V with glslc."""

# ruff: noqa: F401

__version__ = "0.1.0"

from . import utils
from .utils import logger, enums
from .utils.enums import Anchor, ShaderStage
from .errors import (
    GlslBuildError,
    ConfigurationError,
    DuplicateModuleNameError,
    CompilerNotFoundError,
    ModuleBuildError,
    OutputDirectoryCreationError,
    CompilationFailedError,
    CompilationTimeoutError,
    AggregateBuildError,
)
from .paths import RelativePath
from .modules import ShaderModule, ModuleRegistry
from .compiler import GlslcRunner, find_compiler
from .task import CompileShaders, CompileResult
from .manifest import load_manifest
