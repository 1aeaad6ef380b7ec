import sys, traceback
import argparse
import json
import logging

from config import CRASH_LOG_FILE, DEFAULT_GRID_SIZE_M, LOG_FORMAT, SERVER_HOST, log_level, server_port
from firing_table import FiringTable
from solver import InvalidConfiguration, NoTarget, Solver
from utils import parse_point

logger = logging.getLogger("run")


def excepthook(exctype, value, tb):
    msg = "".join(traceback.format_exception(exctype, value, tb))
    try:
        with open(CRASH_LOG_FILE, "a", encoding="utf-8") as f:
            f.write(msg + "\n")
    except OSError:
        logger.error("Could not write crash log %s", CRASH_LOG_FILE)
    print("UNHANDLED EXCEPTION\n" + msg, file=sys.stderr)
    sys.exit(1)


def cmd_solve(args) -> int:
    solver = Solver(parse_point(args.origin), args.grid_size)
    solver.set_target(parse_point(args.target))
    sol = solver.solve()
    if args.json:
        print(json.dumps(sol.as_dict()))
    else:
        print(sol.describe())
    return 0


def cmd_table(args) -> int:
    table = FiringTable(parse_point(args.origin), args.grid_size)
    for spec in args.target:
        name, sep, coords = spec.partition("=")
        if not sep:
            raise ValueError(f"expected NAME=X,Y, got {spec!r}")
        table.add_target(name, parse_point(coords))
    for name, sol in zip(table.names(), table.solutions()):
        print(f"{name:<12} {sol.range_m:>7} m {sol.bearing_deg:>4}° {sol.bearing_mrad:>5} mrad")
    return 0


def cmd_serve(args) -> int:
    port = args.port if args.port is not None else server_port()
    import uvicorn
    uvicorn.run("map_server.app:app", host=args.host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Range and bearing between grid points.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("solve", help="one origin, one target")
    p.add_argument("--origin", required=True, help="X,Y")
    p.add_argument("--target", required=True, help="X,Y")
    p.add_argument("--grid-size", type=int, default=DEFAULT_GRID_SIZE_M, help="meters per grid unit")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_solve)

    p = sub.add_parser("table", help="one origin, several named targets")
    p.add_argument("--origin", required=True, help="X,Y")
    p.add_argument("--target", action="append", required=True, help="NAME=X,Y (repeatable)")
    p.add_argument("--grid-size", type=int, default=DEFAULT_GRID_SIZE_M)
    p.set_defaults(func=cmd_table)

    p = sub.add_parser("serve", help="run the LAN map server")
    p.add_argument("--host", default=SERVER_HOST)
    p.add_argument("--port", type=int, help="defaults to $ARTY_PORT or 8000")
    p.set_defaults(func=cmd_serve)
    return parser


POINT_OPTIONS = ("--origin", "--target")


def join_point_values(argv):
    """Glue negative point values onto their option so argparse does not read them as flags."""
    out = []
    i = 0
    while i < len(argv):
        tok = argv[i]
        if tok in POINT_OPTIONS and i + 1 < len(argv) and argv[i + 1][:1] == "-" and argv[i + 1][1:2].isdigit():
            out.append(f"{tok}={argv[i + 1]}")
            i += 2
            continue
        out.append(tok)
        i += 1
    return out


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(join_point_values(list(argv)))
    try:
        return args.func(args)
    except (InvalidConfiguration, NoTarget, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


def cli():
    sys.excepthook = excepthook
    try:
        level = log_level()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    sys.exit(main())


if __name__ == "__main__":
    cli()
