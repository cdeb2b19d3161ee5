"""
Oxide CLI Entrypoint.

This module provides the command-line interface for parsing Oxide source code.

Features:
    - Read source from `.ox` files or inline strings.
    - Lex and parse the source, printing the AST or every diagnostic.
    - Output as an indented tree, parenthesized source, JSON, or raw tokens.
    - Write output to console or file.
    - Launch an interactive REPL.

Example usage:
    oxide program.ox
    oxide -s "let x = 1 + 2 * 3;" -f source
    oxide program.ox -f json -o program.json
    oxide --repl --verbose

Exit status is 0 when the source parsed cleanly and 1 when diagnostics were reported.

Functions:
    run_oxide(source: str, is_string: bool = False, fmt: str = "tree", out: Optional[str] = None,
              pretty: bool = False, config: Optional[ParserConfig] = None) -> int:
        Runs the Oxide pipeline (lex → parse → render → output).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import logging
import sys

from oxide.oxide_config import ParserConfig
from oxide.oxide_diagnostics import ParseErrors
from oxide.oxide_lexer import tokenize
from oxide.oxide_parser import parse_source
from oxide.oxide_printer import format_source, format_tree

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".ox"
FORMATS = ("tree", "source", "json", "tokens")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def render_tokens(source: str) -> str:
    return "\n".join(
        f"{tok.line}:{tok.col}\t{tok.type}\t{tok.value!r}" for tok in tokenize(source)
    )


def run_oxide(
    source: str,
    is_string: bool = False,
    fmt: str = "tree",
    out: str | None = None,
    pretty: bool = False,
    config: ParserConfig | None = None,
) -> int:
    """
    Run the Oxide toolchain: lex, parse, render, and print or write the result.

    Args:
        source (str): The Oxide source code or path to a `.ox` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        fmt (str): One of 'tree', 'source', 'json', 'tokens'. Defaults to 'tree'.
        out (str | None): Optional path to write the rendered output. If None, prints to stdout.
        pretty (bool): If True, prints formatted banners around the output. Defaults to False.
        config (ParserConfig | None): Parse limits. Defaults to `ParserConfig()`.

    Returns:
        int: 0 on success, 1 if the source produced diagnostics.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.ox',
            or if `fmt` is unknown.
    """
    if not is_string and not source.endswith(SOURCE_SUFFIX):
        raise ValueError(f"Only {SOURCE_SUFFIX} files are supported.")
    if fmt not in FORMATS:
        raise ValueError(f"Unknown output format: {fmt!r}")

    # 1. Read source
    if not is_string:
        logger.debug("Reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lex only
    if fmt == "tokens":
        text = render_tokens(source)
    else:
        # 3. Parse
        try:
            program = parse_source(source, config)
        except ParseErrors as e:
            for diag in e.diagnostics:
                print(f"error: {diag}", file=sys.stderr)
            print(f"{len(e.diagnostics)} error(s) found", file=sys.stderr)
            return 1

        # 4. Render
        if fmt == "json":
            text = json.dumps(program.to_dict(), indent=2)
        elif fmt == "source":
            text = format_source(program)
        else:
            text = format_tree(program)

    # 5. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        if pretty:
            print(f"(wrote to {out})")
    elif pretty:
        banner = "=" * 20
        print(f"{banner}\nOxide {fmt}\n{banner}\n{text}\n{banner}")
    else:
        print(text)
    return 0


def main() -> None:
    """
    Entry point for the Oxide CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no source is given or `--repl` is specified.
    - Otherwise, runs the Oxide toolchain and exits with its status.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-f`, `--format`: Output format ('tree', 'source', 'json', 'tokens'), default is 'tree'.
        - `-o`, `--out`: Write output to a file.
        - `-p`, `--pretty`: Show banners around the output.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Start the REPL in verbose mode.
        - `--max-depth`: Maximum nesting depth (overrides OXIDE_MAX_DEPTH).
        - `--log-level`: Logging threshold, default WARNING.
    """
    parser = argparse.ArgumentParser(prog="oxide")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=FORMATS,
        default="tree",
        help="Output format (default: tree)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL instead of parsing"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )
    parser.add_argument(
        "--max-depth", type=int, metavar="N", help="Maximum nesting depth"
    )
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, default="WARNING", help="Logging threshold"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level, format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        if args.max_depth is not None:
            config = ParserConfig(max_depth=args.max_depth)
        else:
            config = ParserConfig.from_env()
    except ValueError as e:
        parser.error(str(e))

    if args.repl or args.source is None:
        from oxide.oxide_repl import start_repl

        start_repl(verbose=args.verbose, config=config)
        return

    status = run_oxide(
        source=args.source,
        is_string=args.string,
        fmt=args.fmt,
        out=args.out,
        pretty=args.pretty,
        config=config,
    )
    if status:
        sys.exit(status)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
