import os

from pytest import raises

from glslbuild import RelativePath, Anchor


def test_relative_path_construction():
    p = RelativePath("debug/shaders")
    assert p.segments == ("debug", "shaders")
    assert p.anchor == "source"
    assert p.is_source_side

    p = RelativePath.output("debug//./shaders/")
    assert p.segments == ("debug", "shaders")
    assert p.anchor == Anchor.output
    assert not p.is_source_side

    p = RelativePath(["a/b", "c"], "output")
    assert p.segments == ("a", "b", "c")

    # Parent segments are kept verbatim
    assert RelativePath("a/../b").segments == ("a", "..", "b")

    assert RelativePath("").segments == ()
    assert str(RelativePath("a/b")) == "a/b"


def test_relative_path_fails():
    with raises(ValueError):
        RelativePath("/abs/path")
    with raises(ValueError):
        RelativePath("a", "sideways")
    with raises(ValueError):
        RelativePath(["/etc", "passwd"])
    with raises(ValueError):
        RelativePath(["a", "/b"])
    with raises(TypeError):
        RelativePath(42)
    with raises(TypeError):
        RelativePath(["a", 3])


def test_relative_path_immutable():
    p = RelativePath("a/b")
    with raises(AttributeError):
        p.foo = 3
    with raises(AttributeError):
        p._segments = ("c",)
    with raises(AttributeError):
        del p._anchor


def test_relative_path_equality():
    assert RelativePath("a/b") == RelativePath(["a", "b"])
    assert RelativePath("a/b") != RelativePath.output("a/b")
    assert RelativePath("a/b") != RelativePath("a")
    assert len({RelativePath("a/b"), RelativePath("a//b"), RelativePath("a")}) == 2


def test_relative_path_compose():
    base = RelativePath("debug")
    child = RelativePath("sub/apply.vert")
    p = base.compose(child)

    assert p.segments == ("debug", "sub", "apply.vert")
    assert p.anchor == "source"
    assert base / child == p
    assert base / "sub/apply.vert" == p

    # Operands are not changed
    assert base.segments == ("debug",)
    assert child.segments == ("sub", "apply.vert")

    with raises(TypeError):
        base.compose(3)


def test_relative_path_compose_inherits_left_anchor():
    p = RelativePath.output("gen").compose(RelativePath.source("x.frag"))
    assert p.anchor == "output"
    assert p.segments == ("gen", "x.frag")

    p = RelativePath.source("gen").compose(RelativePath.output("x.frag"))
    assert p.anchor == "source"


def test_relative_path_compose_is_associative():
    a, b, c = RelativePath("a"), RelativePath("b/c"), RelativePath.output("d")
    assert a.compose(b).compose(c) == a.compose(b.compose(c))
    assert (a / b / c).segments == ("a", "b", "c", "d")


def test_relative_path_resolve():
    src, out = os.path.join("proj"), os.path.join("proj", "build")

    p = RelativePath("debug/apply.vert")
    assert p.resolve(src, out) == os.path.join("proj", "debug", "apply.vert")

    p = RelativePath.output("debug/apply.spv")
    assert p.resolve(src, out) == os.path.join("proj", "build", "debug", "apply.spv")

    # An empty path resolves to the base itself
    assert RelativePath().resolve(src, out) == src


def test_relative_path_resolve_ignores_other_base():
    source_path = RelativePath("x/y.vert")
    output_path = RelativePath.output("x/y.spv")
    for other in ["/a", "/b/c", "relative", ""]:
        assert source_path.resolve("/src", other) == source_path.resolve("/src", "/out")
        assert output_path.resolve(other, "/out") == output_path.resolve("/src", "/out")


def test_relative_path_join_to():
    p = RelativePath("debug/a.spv")
    assert p.join_to("/proj/build") == os.path.join("/proj/build", "debug", "a.spv")
    assert RelativePath.output("a").join_to("/r") == os.path.join("/r", "a")
