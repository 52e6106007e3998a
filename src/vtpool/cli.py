"""
vtpool.cli - Command-line interface.

Main entry point for the vtpool CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from vtpool import __version__
from vtpool.commands import config_cmd, convert, header, import_cmd, info, largest, name


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="vtpool",
        description="ISOBUS Virtual Terminal object pool tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vtpool info pool.iop                     # Summarize a raw object pool
  vtpool convert pool.iop project.aitp     # Wrap a pool in a project file
  vtpool export-iop project.aitp -o out.iop
  vtpool header project.aitp -o object_pool.h
  vtpool import project.aitp other.iop --select 3000 -o merged.aitp
  vtpool name "Data Mask" project.aitp     # Suggest a name for a new object
  vtpool largest pool.iop -n 5             # Largest objects by encoded size

Configuration:
  vtpool config path                       # Show config file location
  vtpool config show                       # View all settings

For detailed command help: vtpool <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"vtpool {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Summarize an object pool or project file",
    )
    info_parser.add_argument("file", type=Path, help="Pool (.iop) or project (.aitp) file")
    info_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    # convert command
    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert between raw pool and project files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The output format follows the output extension:
  .aitp   project file (pool + names + settings)
  other   raw IOP pool
""",
    )
    convert_parser.add_argument("input", type=Path, help="Input file")
    convert_parser.add_argument("output", type=Path, help="Output file")

    # export-iop command
    export_parser = subparsers.add_parser(
        "export-iop",
        help="Write the raw object pool of a project",
    )
    export_parser.add_argument("input", type=Path, help="Project or pool file")
    export_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (default: stdout)",
        metavar="PATH",
    )

    # header command
    header_parser = subparsers.add_parser(
        "header",
        help="Export a C header with one #define per object",
    )
    header_parser.add_argument("file", type=Path, help="Project or pool file")
    header_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (default: stdout)",
        metavar="PATH",
    )

    # import command
    import_parser = subparsers.add_parser(
        "import",
        help="Merge objects of another pool into a project",
    )
    import_parser.add_argument("target", type=Path, help="Project or pool to import into")
    import_parser.add_argument("source", type=Path, help="Project or pool to import from")
    import_parser.add_argument(
        "--select",
        type=int,
        action="append",
        help="Source object id to import (repeatable; default: all)",
        metavar="ID",
    )
    import_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output project file (default: stdout)",
        metavar="PATH",
    )

    # name command
    name_parser = subparsers.add_parser(
        "name",
        help="Suggest a name for a new object",
    )
    name_parser.add_argument("type", help="Object type, e.g. 'Data Mask' or BUTTON")
    name_parser.add_argument("file", type=Path, nargs="?", help="Project or pool file")

    # largest command
    largest_parser = subparsers.add_parser(
        "largest",
        help="List the largest objects by encoded size",
    )
    largest_parser.add_argument("file", type=Path, help="Project or pool file")
    largest_parser.add_argument(
        "-n",
        "--count",
        type=int,
        default=10,
        help="Number of objects to list (default: 10)",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View and modify configuration (show, path, set)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration File:
  vtpool looks for .vtpool.toml in the current directory or parent directories.

Environment overrides:
  VTPOOL_<SECTION>_<KEY>=value, e.g. VTPOOL_AUTOSAVE_INTERVAL_SECS=60
""",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")

    config_show = config_subparsers.add_parser("show", help="Show current configuration")
    config_show.add_argument(
        "--section",
        help="Show only a specific section (e.g., 'autosave')",
        metavar="SECTION",
    )
    config_show.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    config_subparsers.add_parser("path", help="Show config file location")

    config_set = config_subparsers.add_parser("set", help="Set a configuration value")
    config_set.add_argument("key", help="Key as section.key, e.g. project.mask_size")
    config_set.add_argument("value", help="Value (true/false, numbers and JSON are parsed)")

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install vtpool[completion]
    # Then activate: eval "$(register-python-argcomplete vtpool)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    _configure_logging(args)

    try:
        # Dispatch to command handlers
        if args.command == "info":
            return info.run(args)
        elif args.command == "convert":
            return convert.run(args)
        elif args.command == "export-iop":
            return convert.run_export_iop(args)
        elif args.command == "header":
            return header.run(args)
        elif args.command == "import":
            return import_cmd.run(args)
        elif args.command == "name":
            return name.run(args)
        elif args.command == "largest":
            return largest.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
