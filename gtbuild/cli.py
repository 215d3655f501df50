# SPDX-License-Identifier: MIT
"""Command-line interface for gtbuild."""

from __future__ import annotations

import argparse
import json
import logging
import runpy
import sys
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from gtbuild.core.errors import GtbuildError

if TYPE_CHECKING:
    from gtbuild.configure.options import BuildOptions
    from gtbuild.core.project import BuildModel

logger = logging.getLogger("gtbuild")

BUILD_SCRIPT = "gtbuild-build.py"

TOOLCHAIN_CHOICES = ["msvc", "gcc", "sunpro", "xl", "hp", "other"]


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def parse_variables(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Parse KEY=value arguments from a list.

    Args:
        args: List of arguments.

    Returns:
        Tuple of (variables dict, remaining args).
    """
    variables: dict[str, str] = {}
    remaining: list[str] = []

    for arg in args:
        if "=" in arg and not arg.startswith("-"):
            key, _, value = arg.partition("=")
            if key:
                variables[key] = value
            else:
                remaining.append(arg)
        else:
            remaining.append(arg)

    return variables, remaining


def find_script(name: str, search_dir: Path | None = None) -> Path | None:
    """Find a build script by name.

    Args:
        name: Script name (e.g., 'gtbuild-build.py')
        search_dir: Directory to search in (default: current dir)

    Returns:
        Path to script if found, None otherwise.
    """
    if search_dir is None:
        search_dir = Path.cwd()

    script_path = search_dir / name
    if script_path.exists() and script_path.is_file():
        return script_path

    return None


def run_build_script(script_path: Path, model: BuildModel) -> None:
    """Execute a build script against a model.

    The script runs in this process with ``model`` bound in its globals, so
    its declare_* calls add targets and tests to the model. Build variables
    set on the command line are visible to it through get_var.
    """
    logger.info("Running %s", script_path)
    runpy.run_path(
        str(script_path),
        init_globals={"model": model},
        run_name="__main__",
    )
    logger.debug(
        "  %d targets, %d tests declared", len(model.targets), len(model.tests)
    )


def _print_flags(flags: dict[str, object], as_json: bool) -> None:
    if as_json:
        print(json.dumps(flags, indent=2))
        return
    for key, value in flags.items():
        if isinstance(value, dict):
            for var, var_flags in value.items():
                print(f"{var}: {var_flags}")
        else:
            print(f"{key}: {value}")


def _options_from_args(args: argparse.Namespace) -> BuildOptions:
    from gtbuild import set_vars
    from gtbuild.configure.options import BuildOptions

    variables, _ = parse_variables(getattr(args, "extra", []) or [])
    if variables:
        set_vars(variables)
    options = BuildOptions.from_vars()
    overrides: dict[str, bool] = {}
    if getattr(args, "shared", False):
        overrides["build_shared_libs"] = True
    if getattr(args, "force_shared_crt", False):
        overrides["force_shared_crt"] = True
    if getattr(args, "disable_pthreads", False):
        overrides["disable_pthreads"] = True
    if overrides:
        options = replace(options, **overrides)
    return options


def cmd_flags(args: argparse.Namespace) -> int:
    """Print the flag set for a given toolchain, without probing the host."""
    from gtbuild.configure.config import HostProbe
    from gtbuild.core.resolver import resolve_flags
    from gtbuild.tools.toolchain import ToolchainIdentity

    setup_logging(args.verbose, args.debug)

    identity = ToolchainIdentity.parse(args.toolchain, args.compiler_version)
    probe = HostProbe(
        threads_found=args.pthreads,
        thread_libs="-pthread" if args.pthreads else None,
        librt_include=Path("/usr/include") if args.librt else None,
        librt_library=Path("/usr/lib/librt.so") if args.librt else None,
    )
    options = _options_from_args(args)
    flags, _ = resolve_flags(identity, probe, options)
    _print_flags(flags.as_dict(), args.json)
    return 0


def cmd_probe(args: argparse.Namespace) -> int:
    """Probe the host for optional libraries and print the result."""
    from gtbuild.configure.config import Configure

    setup_logging(args.verbose, args.debug)

    config = Configure(build_dir=args.build_dir)
    probe = config.probe_host()
    data = probe.to_dict()
    if args.json:
        print(json.dumps(data, indent=2))
    else:
        for key, value in data.items():
            print(f"{key}: {value if value is not None else '-'}")
    config.save()
    return 0


def cmd_configure(args: argparse.Namespace) -> int:
    """Detect the toolchain, probe the host, resolve and cache the flags.

    When a build script is found, it is run against a fresh BuildModel and
    the populated model is written for the build tool.
    """
    from gtbuild.configure.config import Configure
    from gtbuild.core.project import BuildModel
    from gtbuild.core.resolver import resolve_flags
    from gtbuild.generators.model_json import ModelJsonGenerator

    setup_logging(args.verbose, args.debug)

    source_dir = Path(args.source_dir)
    script: Path | None
    if args.build_script:
        script = Path(args.build_script)
        if not script.is_file():
            logger.error("Build script not found: %s", script)
            return 1
        source_dir = script.parent
    else:
        script = find_script(BUILD_SCRIPT, source_dir)

    build_dir = Path(args.build_dir)
    config = Configure(build_dir=build_dir)
    if args.reconfigure:
        config.reset()

    identity = config.detect_toolchain(args.cxx)
    probe = config.probe_host()
    options = _options_from_args(args)
    flags, caps = resolve_flags(identity, probe, options)

    config.set("flags", flags.as_dict())
    config.set(
        "capabilities",
        {"has_pthreads": caps.has_pthreads, "has_librt": caps.has_librt},
    )
    cache_path = config.save()
    logger.info("Saved configuration to %s", cache_path)

    print(f"Toolchain: {identity}")
    print(f"pthreads: {'yes' if caps.has_pthreads else 'no'}")
    print(f"librt: {'yes' if caps.has_librt else 'no'}")
    print(f"cxx_default: {flags.cxx_default}")

    if script is None:
        logger.warning(
            "No %s found in %s; build model not written", BUILD_SCRIPT, source_dir
        )
        return 0

    model = BuildModel(
        args.name,
        source_dir=source_dir.absolute(),
        binary_dir=build_dir,
        identity=identity,
        flags=flags,
        capabilities=caps,
        options=options,
        python=probe.python,
    )
    run_build_script(script, model)
    model_path = ModelJsonGenerator().generate(model)
    print(
        f"Model: {model_path} "
        f"({len(model.targets)} targets, {len(model.tests)} tests)"
    )
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")


def add_option_args(parser: argparse.ArgumentParser) -> None:
    """Add build option switches."""
    parser.add_argument(
        "--shared", action="store_true", help="Build shared libraries"
    )
    parser.add_argument(
        "--force-shared-crt",
        action="store_true",
        help="Use the shared C runtime for static builds (MSVC)",
    )
    parser.add_argument(
        "--disable-pthreads",
        action="store_true",
        help="Do not use pthreads even when available",
    )
    parser.add_argument(
        "extra",
        nargs="*",
        help="Build variables (KEY=value)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the gtbuild CLI."""
    parser = argparse.ArgumentParser(
        prog="gtbuild",
        description="Build configuration for a C++ unit-testing framework.",
        epilog="Run 'gtbuild <command> --help' for command-specific help.",
    )
    from gtbuild import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # gtbuild flags
    flags_parser = subparsers.add_parser(
        "flags", help="Print the flag set for a toolchain"
    )
    add_common_args(flags_parser)
    flags_parser.add_argument(
        "-t", "--toolchain", choices=TOOLCHAIN_CHOICES, default="gcc"
    )
    flags_parser.add_argument(
        "--compiler-version", metavar="VERSION", help="Compiler version"
    )
    flags_parser.add_argument(
        "--pthreads", action="store_true", help="Assume pthreads are available"
    )
    flags_parser.add_argument(
        "--librt", action="store_true", help="Assume librt is available"
    )
    flags_parser.add_argument("--json", action="store_true", help="JSON output")
    add_option_args(flags_parser)
    flags_parser.set_defaults(func=cmd_flags)

    # gtbuild probe
    probe_parser = subparsers.add_parser("probe", help="Probe the host")
    add_common_args(probe_parser)
    probe_parser.add_argument(
        "-B", "--build-dir", default="build", help="Build directory (default: build)"
    )
    probe_parser.add_argument("--json", action="store_true", help="JSON output")
    probe_parser.set_defaults(func=cmd_probe)

    # gtbuild configure
    conf_parser = subparsers.add_parser(
        "configure", help="Detect, probe, resolve and cache the configuration"
    )
    add_common_args(conf_parser)
    conf_parser.add_argument(
        "-B", "--build-dir", default="build", help="Build directory (default: build)"
    )
    conf_parser.add_argument("--cxx", default="c++", help="C++ compiler to use")
    conf_parser.add_argument(
        "-S",
        "--source-dir",
        default=".",
        help=f"Directory holding {BUILD_SCRIPT} and the sources (default: .)",
    )
    conf_parser.add_argument(
        "-f",
        "--file",
        dest="build_script",
        help=f"Build script to run (default: {BUILD_SCRIPT} in the source dir)",
    )
    conf_parser.add_argument("--name", default="gtest", help="Project name")
    conf_parser.add_argument(
        "-C",
        "--reconfigure",
        action="store_true",
        help="Force re-run of the host probe",
    )
    add_option_args(conf_parser)
    conf_parser.set_defaults(func=cmd_configure)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        result: int = args.func(args)
    except GtbuildError as e:
        logger.error("%s", e)
        return 1
    return result


if __name__ == "__main__":
    sys.exit(main())
