import sys

from . import runtime
from .errors import HostExecutionError, RefusedUnsafeToken
from .mapper.engine import load_vocabulary

USAGE = "Usage: roman-urdu (transpile|run) [--vocab <file.json>] <file|->"


def _read_source(arg: str) -> str:
    if arg == "-":
        return sys.stdin.read()
    with open(arg, "r", encoding="utf-8") as f:
        return f.read()


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2 or args[0] not in ("transpile", "run"):
        print(USAGE, file=sys.stderr)
        return 2
    command, rest = args[0], args[1:]
    if rest[0] == "--vocab":
        if len(rest) < 3:
            print(USAGE, file=sys.stderr)
            return 2
        vocab, rest = rest[1], rest[2:]
    else:
        vocab = None
    try:
        if vocab is not None:
            runtime.extend(load_vocabulary(vocab))
        source = _read_source(rest[0])
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if command == "transpile":
        sys.stdout.write(runtime.transpile(source))
        return 0
    try:
        result = runtime.execute(source)
    except RefusedUnsafeToken as e:
        print(f"refused: {e}", file=sys.stderr)
        return 1
    except HostExecutionError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    if result is not None:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
