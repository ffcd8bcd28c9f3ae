"""A small CLI.

Invoke using e.g. ``python -m glslbuild compile shaders.toml``.
"""

import os
import sys
import argparse

import glslbuild
from glslbuild.compiler import GlslcRunner
from glslbuild.errors import AggregateBuildError, ConfigurationError
from glslbuild.manifest import load_manifest


def main(argv=None):
    # Get argv so we can massage it
    if argv is None:
        argv = sys.argv[1:]

    # Defaults and aliases
    if not argv:
        argv = ["help"]
    if argv == ["--version"]:
        argv = ["version"]

    parser = argparse.ArgumentParser(
        prog="glslbuild",
        description="Compile the shader modules declared in a manifest",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("help", help="Show this help")
    subparsers.add_parser("version", help="Show the version")

    compile_parser = subparsers.add_parser("compile", help="Run shader tasks")
    compile_parser.add_argument("manifest", help="The TOML manifest to load")
    compile_parser.add_argument(
        "--task",
        action="append",
        dest="tasks",
        default=[],
        help="Name of a task to run (can be repeated, default all)",
    )
    compile_parser.add_argument(
        "--source-root", help="The source root (default: the manifest's directory)"
    )
    compile_parser.add_argument(
        "--build-root", help="The build output root (default: <source-root>/build)"
    )
    compile_parser.add_argument(
        "--jobs", type=int, default=1, help="Modules to compile in parallel"
    )
    compile_parser.add_argument("--glslc", help="Path to the glslc executable")
    compile_parser.add_argument(
        "--timeout", type=float, help="Timeout per compiler invocation, in seconds"
    )

    args = parser.parse_args(argv)

    if args.command == "help":
        parser.print_help()
        return 0
    if args.command == "version":
        print("glslbuild v" + glslbuild.__version__)
        return 0
    return _compile(args)


def _compile(args):
    source_root = args.source_root or os.path.dirname(os.path.abspath(args.manifest))
    build_root = args.build_root or os.path.join(source_root, "build")

    try:
        runner = GlslcRunner(args.glslc, args.timeout)
        tasks = load_manifest(args.manifest, runner=runner)
        missing = [name for name in args.tasks if name not in tasks]
        if missing:
            raise ConfigurationError(f"Unknown task(s): {', '.join(missing)}")
        selected = args.tasks or list(tasks)
        for name in selected:
            results = tasks[name].run(source_root, build_root, jobs=args.jobs)
            for result in results:
                print(f"Compiled {result.module_name}: {result.output}")
    except AggregateBuildError as err:
        print(str(err), file=sys.stderr)
        return 1
    except (ValueError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
