from pytest import raises

from glslbuild import load_manifest, RelativePath, ConfigurationError


MANIFEST = """
[tasks.compileDebugShaders]
base_dir = "debug"

[tasks.compileDebugShaders.modules.ApplyVert]
source = "apply.vert"
output = "apply_vert.spv"

[tasks.compileDebugShaders.modules.ApplyFrag]
source = "apply.frag"
output = "apply_frag.spv"
stage = "fragment"

[tasks.compileGenerated]
base_dir = {path = "gen", anchor = "output"}
include_dirs = ["common", "more/includes"]

[tasks.compileGenerated.modules.Blur]
source = "blur.comp"
output = {path = "blur.spv", anchor = "output"}
"""


def test_load_manifest_text():
    tasks = load_manifest(MANIFEST)
    assert list(tasks) == ["compileDebugShaders", "compileGenerated"]

    debug = tasks["compileDebugShaders"]
    assert debug.name == "compileDebugShaders"
    assert debug.base_dir == RelativePath.source("debug")
    assert debug.modules.names() == ["ApplyVert", "ApplyFrag"]
    assert debug.modules["ApplyVert"].stage == "auto"
    assert debug.modules["ApplyFrag"].stage == "fragment"
    assert debug.modules["ApplyFrag"].source == RelativePath("apply.frag")

    gen = tasks["compileGenerated"]
    assert gen.base_dir == RelativePath.output("gen")
    assert gen.include_dirs == ("common", "more/includes")
    assert gen.modules["Blur"].output == RelativePath.output("blur.spv")


def test_load_manifest_file(tmp_path, fake_runner):
    filename = tmp_path / "shaders.toml"
    filename.write_text(MANIFEST)
    tasks = load_manifest(filename, runner=fake_runner)
    assert tasks["compileDebugShaders"].runner is fake_runner

    tasks["compileDebugShaders"].run(tmp_path, tmp_path / "build")
    assert (tmp_path / "build" / "debug" / "apply_vert.spv").is_file()
    assert len(fake_runner.calls) == 2


def test_load_manifest_errors():
    bad_manifests = [
        "[tasks\n",  # not toml
        "[other]\nx = 1\n",  # unknown top-level key
        "[tasks]\n",  # no tasks
        "[tasks.t]\nmodules = {}\n",  # no base_dir
        "[tasks.t]\nbase_dir = 3\n",
        "[tasks.t]\nbase_dir = '/abs'\n",
        "[tasks.t]\nbase_dir = {path = 'a', anchor = 'elsewhere'}\n",
        "[tasks.t]\nbase_dir = 'a'\ninclude_dirs = 'common'\n",
        "[tasks.t]\nbase_dir = 'a'\nfoo = 1\n",
        "[tasks.t]\nbase_dir = 'a'\n[tasks.t.modules.M]\nsource = 'm.vert'\n",
        "[tasks.t]\nbase_dir = 'a'\n[tasks.t.modules.M]\n"
        "source = 'm.vert'\noutput = 'm.spv'\nstage = 'pixel'\n",
        "[tasks.t]\nbase_dir = 'a'\n[tasks.t.modules.M]\n"
        "source = 'm.vert'\noutput = 'm.spv'\nopt = 1\n",
    ]
    for text in bad_manifests:
        with raises(ConfigurationError):
            load_manifest(text)


def test_load_manifest_error_names_module():
    text = "[tasks.t]\nbase_dir = 'a'\n[tasks.t.modules.NoOutput]\nsource = 'm.vert'\n"
    with raises(ConfigurationError) as err:
        load_manifest(text)
    assert err.value.module_name == "NoOutput"
