import io
import traceback

from playscript.playscript_errors import PlayScriptError
from playscript.playscript_eval import Interpreter, format_value
from playscript.playscript_parser import parse

COMMANDS = frozenset({"vars", "reset", "verbose-mode"})


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def format_variables(interpreter: Interpreter) -> str:
    if not interpreter.variables:
        return "(no variables)"
    return "\n".join(
        f"{name}: {format_value(value)}"
        for name, value in sorted(interpreter.variables.items())
    )


def handle_command(src: str, interpreter: Interpreter) -> bool:
    """Runs a REPL meta command; returns False when ``src`` is PlayScript code."""
    command = src.strip().lower()
    if command == "vars":
        print(format_variables(interpreter))
        return True
    if command == "reset":
        interpreter.reset()
        print("[ok] >>> Variables cleared.")
        return True
    return False


def start_repl(verbose: bool = False) -> None:
    print("PlayScript REPL. Type 'exit' or 'quit' to leave.")
    interpreter = Interpreter()

    while True:
        try:
            src_lines: list[str] = []
            while True:
                prompt = ">>> " if not src_lines else "... "
                line = input(prompt)
                if line.strip() in ("exit", "quit") and not src_lines:
                    print("Exiting PlayScript REPL.")
                    return
                src_lines.append(line)
                stripped = "\n".join(src_lines).strip()
                if not stripped or stripped.endswith(";") or stripped.lower() in COMMANDS:
                    break
            src = "\n".join(src_lines).strip()
            if not src:
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            if handle_command(src, interpreter):
                continue

            try:
                tree = parse(src)
                if verbose:
                    print(tree.dump())
                for result in interpreter.iter_results(tree):
                    print(result)
            except PlayScriptError as e:
                print(f"[error] >>> {e}")
            except Exception:
                print_traceback()

        except (EOFError, KeyboardInterrupt):
            print("\nExiting PlayScript REPL.")
            return


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
