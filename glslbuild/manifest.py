"""
Loading shader tasks from a TOML manifest.

A manifest declares one or more named tasks, each with a base directory,
optional include directories, and its modules::

    [tasks.compileDebugShaders]
    base_dir = "debug"
    include_dirs = ["common"]

    [tasks.compileDebugShaders.modules.ApplyVert]
    source = "apply.vert"
    output = "apply_vert.spv"

    [tasks.compileDebugShaders.modules.ApplyFrag]
    source = "apply.frag"
    output = "apply_frag.spv"
    stage = "fragment"

Paths can also be given as a table ``{path = "...", anchor = "output"}``
to anchor them to the build output root. Tasks and modules keep the order
in which they appear in the file.
"""

import os
import tomllib

from .errors import ConfigurationError
from .paths import RelativePath
from .task import CompileShaders


TASK_KEYS = {"base_dir", "include_dirs", "modules"}
MODULE_KEYS = {"source", "output", "stage"}


def load_manifest(source, runner=None):
    """Load the tasks declared in a TOML manifest.

    Parameters
    ----------
    source : str | os.PathLike
        A path to a manifest file, or the TOML text itself (a str that
        contains a newline is treated as text).
    runner : object | None
        The compiler runner to give to each task.

    Returns a dict mapping task names to ``CompileShaders`` objects, in
    manifest order.
    """
    if isinstance(source, str) and "\n" in source:
        text = source
    else:
        with open(os.fspath(source), "rb") as f:
            text = f.read().decode()
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as err:
        raise ConfigurationError(f"Invalid manifest: {err}") from None

    unknown = set(data) - {"tasks"}
    if unknown:
        raise ConfigurationError(f"Unknown manifest keys: {sorted(unknown)}")
    tasks_data = data.get("tasks")
    if not isinstance(tasks_data, dict) or not tasks_data:
        raise ConfigurationError("Manifest must declare at least one [tasks.<name>].")

    tasks = {}
    for task_name, task_data in tasks_data.items():
        tasks[task_name] = _load_task(task_name, task_data, runner)
    return tasks


def _load_task(task_name, data, runner):
    where = f"Task '{task_name}'"
    if not isinstance(data, dict):
        raise ConfigurationError(f"{where} must be a table.")
    unknown = set(data) - TASK_KEYS
    if unknown:
        raise ConfigurationError(f"{where} has unknown keys: {sorted(unknown)}")
    if "base_dir" not in data:
        raise ConfigurationError(f"{where} has no base_dir.")

    task = CompileShaders(
        _load_path(where + " base_dir", data["base_dir"]), runner=runner, name=task_name
    )

    include_dirs = data.get("include_dirs", [])
    if not isinstance(include_dirs, list) or not all(
        isinstance(d, str) for d in include_dirs
    ):
        raise ConfigurationError(f"{where} include_dirs must be a list of strings.")
    for include_dir in include_dirs:
        task.include(include_dir)

    modules = data.get("modules", {})
    if not isinstance(modules, dict):
        raise ConfigurationError(f"{where} modules must be a table.")
    for module_name, module_data in modules.items():
        _load_module(task, module_name, module_data)
    return task


def _load_module(task, module_name, data):
    if not isinstance(data, dict):
        raise ConfigurationError("module declaration must be a table.", module_name)
    unknown = set(data) - MODULE_KEYS
    if unknown:
        raise ConfigurationError(f"unknown keys: {sorted(unknown)}", module_name)
    for key in ("source", "output"):
        if key not in data:
            raise ConfigurationError(f"{key} is not set.", module_name)

    module = task.add_module(module_name)
    module.source = _load_path(f"Module '{module_name}' source", data["source"])
    module.output = _load_path(f"Module '{module_name}' output", data["output"])
    if "stage" in data:
        try:
            module.stage = data["stage"]
        except ValueError as err:
            raise ConfigurationError(str(err), module_name) from None


def _load_path(where, value):
    if isinstance(value, str):
        value = {"path": value}
    if isinstance(value, dict) and "path" in value and set(value) <= {"path", "anchor"}:
        try:
            return RelativePath(value["path"], value.get("anchor", "source"))
        except (TypeError, ValueError) as err:
            raise ConfigurationError(f"{where}: {err}") from None
    raise ConfigurationError(
        f"{where} must be a string or a table with 'path' and optional 'anchor'."
    )
