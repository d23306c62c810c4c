# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the yamlkit command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from yachalk import chalk

from yamlkit.config.options import OPTIONS_FILE_NAME, OptionsError, ParserOptions, find_options_file, load_options
from yamlkit.interop.json_codec import JSONConversionError, serialize, write_json
from yamlkit.model.values import SequenceValue
from yamlkit.parser.errors import ParseError
from yamlkit.parser.parser import parse_all, parse_one

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the yamlkit CLI."""
    parser = argparse.ArgumentParser(
        prog="yamlkit",
        description="yamlkit: parse YAML documents and convert them to JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log parser activity to stderr",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Options file (default: {OPTIONS_FILE_NAME} in the working directory, if present)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check that YAML files parse",
        description="Parse each file as a stream of YAML documents and report errors.",
    )
    check_parser.add_argument(
        "files",
        nargs="+",
        help="YAML files to check ('-' reads standard input)",
    )

    # to-json subcommand
    to_json_parser = subparsers.add_parser(
        "to-json",
        help="Convert a YAML document to JSON",
        description=(
            "Parse a single YAML document and print it as JSON. With --all, every "
            "document of the stream is printed as one JSON array."
        ),
    )
    to_json_parser.add_argument(
        "file",
        help="YAML file to convert ('-' reads standard input)",
    )
    to_json_parser.add_argument(
        "--all",
        action="store_true",
        help="Convert all documents of a multi-document stream",
    )
    to_json_parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indent the JSON output by this many spaces (default: compact, or json-indent from the options file)",
    )
    to_json_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the JSON to this file instead of standard output",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_STDIN_NAME = "-"


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        options = _resolve_options(args.config)
    except OptionsError as exc:
        print(f"{chalk.red('Error:')} {exc}", file=sys.stderr)
        return 1

    if args.command == "check":
        return _cmd_check(args, options)
    if args.command == "to-json":
        return _cmd_to_json(args, options)
    return 0


def _resolve_options(config: str | None) -> ParserOptions:
    """Load options from --config, or from the working directory's options file if present."""
    if config is not None:
        return load_options(Path(config))
    path = find_options_file(Path.cwd())
    if path is None:
        return ParserOptions()
    logger.info("Using options file %s", path)
    return load_options(path)


def _read_source(name: str) -> str:
    """Return the text of the named file, or of standard input for '-'."""
    if name == _STDIN_NAME:
        return sys.stdin.read()
    return Path(name).read_text(encoding="utf-8")


def _describe(name: str, exc: ParseError) -> str:
    """Format a parse error with its location, as 'file:line:column: message'."""
    label = "<stdin>" if name == _STDIN_NAME else name
    if exc.line is None:
        return f"{label}: {exc}"
    return f"{label}:{exc.line}:{exc.column}: {exc}"


def _cmd_check(args: argparse.Namespace, options: ParserOptions) -> int:
    """Handle the check subcommand."""
    failures = 0
    for name in args.files:
        try:
            documents = parse_all(_read_source(name), options)
        except OSError as exc:
            print(f"  {chalk.red('FAIL')}  {name}: {exc}", file=sys.stderr)
            failures += 1
            continue
        except ParseError as exc:
            print(f"  {chalk.red('FAIL')}  {_describe(name, exc)}", file=sys.stderr)
            failures += 1
            continue
        print(f"  {chalk.green('OK')}    {name} ({len(documents)} document(s))")

    if failures:
        print(chalk.red(f"{failures} of {len(args.files)} file(s) failed to parse."), file=sys.stderr)
        return 1
    print(chalk.green(f"All {len(args.files)} file(s) parsed."))
    return 0


def _cmd_to_json(args: argparse.Namespace, options: ParserOptions) -> int:
    """Handle the to-json subcommand."""
    indent = args.indent if args.indent is not None else options.json_indent
    try:
        source = _read_source(args.file)
    except OSError as exc:
        print(f"{chalk.red('Error:')} cannot read '{args.file}': {exc}", file=sys.stderr)
        return 1

    try:
        if args.all:
            value = SequenceValue(items=tuple(parse_all(source, options)))
        else:
            value = parse_one(source, options)
    except ParseError as exc:
        print(f"{chalk.red('Error:')} {_describe(args.file, exc)}", file=sys.stderr)
        return 1

    try:
        if args.output is None:
            print(serialize(value, indent=indent, non_string_keys=options.non_string_keys))
        else:
            write_json(value, Path(args.output), indent=indent, non_string_keys=options.non_string_keys)
    except JSONConversionError as exc:
        print(f"{chalk.red('Error:')} {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"{chalk.red('Error:')} cannot write '{args.output}': {exc}", file=sys.stderr)
        return 1
    return 0
