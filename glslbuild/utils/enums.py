"""
The enums used in glslbuild. The enums are all available from the root ``glslbuild`` namespace.
"""

from wgpu.utils import BaseEnum


__all__ = ["Anchor", "ShaderStage"]


STAGE_FLAG_PREFIX = "-fshader-stage="


class Enum(BaseEnum):
    """Enum base class for glslbuild."""


class Anchor(Enum):
    """The Anchor enum specifies which project root a relative path is resolved against."""

    source = None  #: The source tree (where shader sources live).
    output = None  #: The build output tree (where compiled artifacts are written).


class ShaderStage(Enum):
    """The ShaderStage enum specifies the pipeline stage a shader module is compiled for.

    The value of each option is what glslc expects after ``-fshader-stage=``.
    """

    auto = None  #: Let the compiler infer the stage from the file extension (no flag is passed).
    vertex = None  #: Vertex shader.
    fragment = None  #: Fragment shader.
    tess_control = "tesscontrol"  #: Tessellation control shader.
    tess_eval = "tesseval"  #: Tessellation evaluation shader.
    geometry = None  #: Geometry shader.
    compute = None  #: Compute shader.


def stage_flag(stage):
    """Get the compiler flag for the given stage, or None for ``ShaderStage.auto``."""
    if stage == ShaderStage.auto:
        return None
    return STAGE_FLAG_PREFIX + stage
