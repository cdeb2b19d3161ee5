"""
Interactive read-parse-print loop for the Oxide language.

Each complete input buffer is handed once to `parse_source`; the resulting
tree, or every diagnostic, is printed. Lines that leave a `{` open continue on
a `... ` prompt until the braces balance.

Commands:
    help, h          Show the help text
    quit, exit, q    Leave the REPL
    clear, cls       Clear the screen
    verbose-mode     Toggle printing tokens and the source rendering
"""

import io
import sys
import traceback

from oxide.oxide_config import ParserConfig
from oxide.oxide_diagnostics import ParseErrors
from oxide.oxide_lexer import tokenize
from oxide.oxide_parser import parse_source
from oxide.oxide_printer import format_source, format_tree

QUIT_COMMANDS = ("quit", "exit", "q")
HELP_COMMANDS = ("help", "h")
CLEAR_COMMANDS = ("clear", "cls")
CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"

HELP_TEXT = """Commands:
  help, h        - Show this help message
  quit, exit, q  - Exit the REPL
  clear, cls     - Clear the screen
  verbose-mode   - Toggle token and source output

Examples:
  let x = 42;
  1 + 2 * 3;
  (1 + 2) * (3 - 4);
  -42;
  { let x = 5; x + 10; }"""


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def handle_input(src: str, config: ParserConfig | None = None, verbose: bool = False) -> bool:
    """Parses one buffer and prints the outcome.

    Returns:
        True if the buffer parsed without diagnostics.
    """
    if verbose:
        print(f"[tokens] >>> {tokenize(src)}")
    try:
        program = parse_source(src, config)
    except ParseErrors as e:
        count = len(e.diagnostics)
        print(f"[error] >>> Parse failed with {count} error(s):")
        for i, diag in enumerate(e.diagnostics, 1):
            print(f"  {i}: {diag}")
        return False

    if not program.statements:
        print("[ok] >>> No statements parsed")
        return True
    print(f"[ok] >>> Parsed {len(program.statements)} statement(s)")
    if verbose:
        print(f"[source] >>> {format_source(program)}")
    print(format_tree(program))
    return True


def read_buffer() -> str:
    """Reads lines until every `{` typed so far has been closed."""
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            break
    return "\n".join(src_lines).strip()


def start_repl(verbose: bool = False, config: ParserConfig | None = None) -> None:
    print("Oxide REPL. Type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            src = read_buffer()
            if not src:
                continue
            command = src.lower()
            if command in QUIT_COMMANDS:
                print("Exiting Oxide REPL.")
                return
            if command in HELP_COMMANDS:
                print(HELP_TEXT)
                continue
            if command in CLEAR_COMMANDS:
                print(CLEAR_SCREEN, end="")
                continue
            if command == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            try:
                handle_input(src, config, verbose)
            except Exception:
                print_traceback()

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Oxide REPL.")
            break


def main() -> None:
    try:
        config = ParserConfig.from_env()
    except ValueError as e:
        print(f"oxide-repl: error: {e}", file=sys.stderr)
        sys.exit(2)
    start_repl(config=config)


if __name__ == "__main__":
    main()
