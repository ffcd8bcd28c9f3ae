"""
Declaration of shader modules.

A shader module is a single compilation unit: one source file that is
compiled into one output artifact. Modules are declared on a
``ModuleRegistry`` and then configured, in the create-then-configure
style of a build script::

    registry = ModuleRegistry()
    registry.declare("ApplyVert").set_source("apply.vert").set_output("apply_vert.spv")
    registry.declare("ApplyFrag", lambda m: m.set_source("apply.frag").set_output("apply_frag.spv"))

"""

from .errors import ConfigurationError, DuplicateModuleNameError
from .paths import RelativePath
from .utils import assert_type, check_enum
from .utils.enums import ShaderStage


def _as_relative_path(value):
    if isinstance(value, str):
        return RelativePath.source(value)
    assert_type("path", value, None, RelativePath)
    return value


class ShaderModule:
    """A named shader compilation unit.

    Parameters
    ----------
    name : str
        The unique name of this module. Cannot be changed afterwards.
    """

    def __init__(self, name):
        assert_type("name", name, str)
        if not name:
            raise ValueError("ShaderModule name must not be empty.")
        self._name = name
        self._source = None
        self._output = None
        self._stage = ShaderStage.auto
        self._sealed = False

    def __repr__(self):
        return (
            f"<ShaderModule {self._name!r} source={self._source!r} "
            f"output={self._output!r} stage={self._stage!r}>"
        )

    def _seal(self):
        # Called by the owning registry when the build starts
        self._sealed = True

    def _check_not_sealed(self):
        if self._sealed:
            raise RuntimeError(
                f"Shader module '{self._name}' cannot be changed once the build has started."
            )

    @property
    def name(self):
        """The name of this module."""
        return self._name

    @property
    def source(self):
        """The source file, relative to the task's base directory.

        Can be set using a ``RelativePath`` or a string. A string is taken
        to be relative to the source root.
        """
        return self._source

    @source.setter
    def source(self, value):
        self._check_not_sealed()
        self._source = _as_relative_path(value)

    @property
    def output(self):
        """The output artifact, relative to the task's base directory.

        Can be set using a ``RelativePath`` or a string. The output is always
        written into the build output tree.
        """
        return self._output

    @output.setter
    def output(self, value):
        self._check_not_sealed()
        self._output = _as_relative_path(value)

    @property
    def stage(self):
        """The shader stage to compile for. Defaults to "auto".

        See :obj:`glslbuild.utils.enums.ShaderStage`.
        """
        return self._stage

    @stage.setter
    def stage(self, value):
        self._check_not_sealed()
        self._stage = check_enum(
            "ShaderModule.stage", value, ShaderStage, default=ShaderStage.auto
        )

    def set_source(self, value):
        self.source = value
        return self

    def set_output(self, value):
        self.output = value
        return self

    def set_stage(self, value):
        self.stage = value
        return self

    def validate(self):
        """Raise ConfigurationError if a required field is not set."""
        if self._source is None:
            raise ConfigurationError("source is not set.", self._name)
        if self._output is None:
            raise ConfigurationError("output is not set.", self._name)


class ModuleRegistry:
    """An insertion-ordered collection of uniquely named shader modules.

    Modules are kept in declaration order, which is also the order in
    which they are compiled.
    """

    def __init__(self):
        self._modules = {}
        self._sealed = False

    def __len__(self):
        return len(self._modules)

    def __iter__(self):
        return iter(list(self._modules.values()))

    def __contains__(self, name):
        return name in self._modules

    def __getitem__(self, name):
        return self._modules[name]

    def __repr__(self):
        return f"<ModuleRegistry with {len(self)} modules: {self.names()}>"

    @property
    def sealed(self):
        """Whether the registry is sealed (no more declarations or changes allowed)."""
        return self._sealed

    def declare(self, name, action=None):
        """Declare a new module and return it.

        If ``action`` is given, it is called with the new module so it can be
        configured in place. Raises DuplicateModuleNameError if a module with
        this name already exists.
        """
        if self._sealed:
            raise RuntimeError("Cannot declare modules once the build has started.")
        assert_type("name", name, str)
        if name in self._modules:
            raise DuplicateModuleNameError(name)
        if action is not None and not callable(action):
            raise TypeError(f"Module action must be callable, not {action!r}")
        module = ShaderModule(name)
        if action is not None:
            action(module)
        self._modules[name] = module
        return module

    def all(self):
        """Get a list of all modules, in declaration order."""
        return list(self._modules.values())

    def names(self):
        """Get a list of all module names, in declaration order."""
        return list(self._modules.keys())

    def seal(self):
        """Freeze the registry and all of its modules."""
        self._sealed = True
        for module in self._modules.values():
            module._seal()
