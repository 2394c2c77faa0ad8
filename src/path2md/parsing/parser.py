# path2md/parsing/parser.py
from __future__ import annotations

import argparse


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser.

    Notes:
        - ``-i/--ignore`` is repeatable and each value may hold several
          comma-separated globs.
        - ``--structure-only`` and ``--list`` are mutually exclusive.
    """
    from path2md import __version__

    p = argparse.ArgumentParser(
        prog="path2md",
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            "path2md – dump the contents of a path as a structured text report.\n"
            "Directories are preceded by a tree diagram; binary files are summarised\n"
            "by format, media type and size."
        ),
    )

    g_in = p.add_argument_group("Input")
    g_mode = p.add_argument_group("Output mode")
    g_out = p.add_argument_group("Output & logging")

    g_in.add_argument(
        "path",
        metavar="PATH",
        help="File or directory to dump. Symlinks are rejected.",
    )
    g_in.add_argument(
        "-i",
        "--ignore",
        metavar="GLOB[,GLOB…]",
        action="append",
        dest="ignore",
        default=[],
        help=(
            "Skip paths matching GLOB and, for directories, their whole subtree.\n"
            "Globs match the path relative to PATH in POSIX form ('src/*.py');\n"
            "'*' also crosses '/', and a bare name ('build') matches at any depth.\n"
            "Repeatable; PATH2MD_IGNORE adds more comma-separated globs."
        ),
    )

    mx = g_mode.add_mutually_exclusive_group()
    mx.add_argument(
        "-s",
        "--structure-only",
        action="store_true",
        dest="structure_only",
        help="Emit only the directory structure diagram (no file bodies).",
    )
    mx.add_argument(
        "-l",
        "--list",
        action="store_true",
        dest="list_only",
        help="Emit only the relative path of every file, one per line.",
    )

    g_out.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        dest="output",
        help="Write the report to FILE (UTF-8) instead of stdout.",
    )
    g_out.add_argument(
        "--report",
        action="store_true",
        dest="report",
        help="Print a JSON run report (counts, bytes, timings) to stderr.",
    )
    g_out.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit logs as JSON lines on stderr (also PATH2MD_JSON_LOGS=1).",
    )
    g_out.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="Enable debug logging (PATH2MD_TRACE_IO=1 adds per-node IO traces).",
    )
    g_out.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return p
