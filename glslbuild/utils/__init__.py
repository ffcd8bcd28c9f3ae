"""
Utility functions for glslbuild.
"""

import os
import types
import logging
import inspect

from . import enums  # noqa: F401


logger = logging.getLogger("glslbuild")


def _set_log_level():
    # Set default level
    logger.setLevel(logging.WARN)
    # Set user-specified level
    level = os.getenv("GLSLBUILD_LOG_LEVEL", "")
    if level:
        try:
            if level.isnumeric():
                logger.setLevel(int(level))
            else:
                logger.setLevel(level.upper())
        except Exception:
            logger.warning(f"Invalid glslbuild log level: {level}")


_set_log_level()


def assert_type(name, value, *classes):
    allow_none = False
    if classes[0] is None:
        if value is None:
            return
        allow_none = True
        classes = classes[1:]

    if not isinstance(value, classes):
        # Point the traceback at the caller of the function that checks its args
        f = inspect.currentframe()
        f = f.f_back
        if name:
            f = f.f_back
        tb = types.TracebackType(None, f, f.f_lasti, f.f_lineno)

        msg = "Expected"
        if name:
            msg += f" '{name}' to be"
        class_strings = [cls.__name__ for cls in classes]
        msg += f" an instance of {' | '.join(class_strings)}"
        if allow_none:
            msg += " or None"
        msg += f", but got {value.__class__.__name__} object."

        raise TypeError(msg).with_traceback(tb) from None


def check_enum(owner, value, enum_cls, default=None):
    """Normalize an enum value, raising ValueError if it is not an option.

    ``owner`` is a dotted name (e.g. "ShaderModule.stage") used in the error
    message. A falsy value is replaced with ``default`` when that is given.
    """
    if not value and default is not None:
        value = default
    if isinstance(value, str):
        value = value.lower()
    if value not in enum_cls:
        raise ValueError(f"{owner} must be a string in {enum_cls}, not {value!r}")
    return value
