"""
Relative paths that know which project root they belong to.

A shader task describes its files relative to either the source tree or
the build output tree. A ``RelativePath`` stores the path segments together
with that anchor, and is only turned into a real filesystem path once the
two roots are known.
"""

import os

from .utils import assert_type, check_enum
from .utils.enums import Anchor


class RelativePath:
    """An immutable path fragment, anchored to the source or the output tree.

    Parameters
    ----------
    path : str | tuple | list
        The path, either as a string (using "/" or the os separator) or as
        a sequence of segments. Empty and "." segments are dropped. ".."
        segments are kept as they are; they are never collapsed, so the
        resolved path may point outside of the base directory.
    anchor : str | Anchor
        Whether the path is relative to the source root ("source", the
        default) or to the build output root ("output").
    """

    __slots__ = ["_anchor", "_segments"]

    def __init__(self, path="", anchor="source"):
        anchor = check_enum("RelativePath.anchor", anchor, Anchor)
        if isinstance(path, str):
            if os.path.isabs(path) or path.startswith("/"):
                raise ValueError(f"RelativePath must be relative, got {path!r}")
            parts = path.replace(os.sep, "/").split("/")
        elif isinstance(path, (tuple, list)):
            parts = []
            for part in path:
                assert_type("segment", part, str)
                if os.path.isabs(part) or part.startswith("/"):
                    raise ValueError(f"RelativePath must be relative, got {path!r}")
                parts.extend(part.replace(os.sep, "/").split("/"))
        else:
            raise TypeError(
                f"RelativePath path must be a str or a sequence of str, not {path!r}"
            )
        segments = tuple(part for part in parts if part not in ("", "."))
        object.__setattr__(self, "_anchor", anchor)
        object.__setattr__(self, "_segments", segments)

    @classmethod
    def source(cls, path):
        """Create a path relative to the source root."""
        return cls(path, Anchor.source)

    @classmethod
    def output(cls, path):
        """Create a path relative to the build output root."""
        return cls(path, Anchor.output)

    def __setattr__(self, name, value):
        raise AttributeError("RelativePath is immutable")

    def __delattr__(self, name):
        raise AttributeError("RelativePath is immutable")

    @property
    def anchor(self):
        """The root this path is relative to. See :obj:`glslbuild.utils.enums.Anchor`."""
        return self._anchor

    @property
    def is_source_side(self):
        """Whether this path is relative to the source root."""
        return self._anchor == Anchor.source

    @property
    def segments(self):
        """The path segments, as a tuple of strings."""
        return self._segments

    def compose(self, child):
        """Append ``child`` to this path, returning a new path.

        The result always keeps the anchor of this path, also when ``child``
        is anchored to the other root. A string child is accepted too.
        """
        if isinstance(child, str):
            child = RelativePath(child, self._anchor)
        assert_type("child", child, RelativePath)
        return RelativePath(self._segments + child._segments, self._anchor)

    def __truediv__(self, child):
        if not isinstance(child, (str, RelativePath)):
            return NotImplemented
        return self.compose(child)

    def resolve(self, source_base, output_base):
        """Get the absolute path, picking the base that matches the anchor.

        This does no I/O and does not normalize the result.
        """
        base = source_base if self.is_source_side else output_base
        return self.join_to(base)

    def join_to(self, root):
        """Join this path onto the given root, regardless of the anchor."""
        return os.path.join(os.fspath(root), *self._segments)

    def __eq__(self, other):
        if not isinstance(other, RelativePath):
            return NotImplemented
        return self._anchor == other._anchor and self._segments == other._segments

    def __hash__(self):
        return hash((self._anchor, self._segments))

    def __str__(self):
        return "/".join(self._segments)

    def __repr__(self):
        return f"<RelativePath {self._anchor}:{str(self)!r}>"
