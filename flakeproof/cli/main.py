# flakeproof/cli/main.py
import argparse

from flakeproof.cli.ping_cmd import run_ping
from flakeproof.cli.trace_cmd import trace_list, trace_show


def build_parser():
    parser = argparse.ArgumentParser(
        "flakeproof",
        description="flakeproof - Resilient tool execution engine",
    )
    sub = parser.add_subparsers(dest="command")

    # ping - health check
    ping_p = sub.add_parser("ping", help="Run tool.ping and print the result envelope")
    ping_p.add_argument("--message", help="Message to echo back (1-200 chars)")
    ping_p.add_argument("--config", help="Path to config.yml (default: ~/.flakeproof/config.yml)")

    # trace - trace file commands
    trace_p = sub.add_parser("trace", help="Inspect persisted trace files")
    trace_sub = trace_p.add_subparsers(dest="trace_command")

    # trace show
    show_p = trace_sub.add_parser("show", help="Pretty-print one trace file")
    show_p.add_argument("trace", help="Path to <traceId>.json")
    show_p.add_argument("--json", action="store_true", help="Print the raw record as JSON")

    # trace list
    list_p = trace_sub.add_parser("list", help="List trace files, newest first")
    list_p.add_argument("dir", help="Traces directory (usually <userDataDir>/traces)")
    list_p.add_argument("--limit", type=int, default=10, help="Number of traces to show (default: 10)")

    return parser, trace_p


def main(argv=None):
    parser, trace_p = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if not args.command:
        parser.print_help()
        return 1

    if args.command == "ping":
        return run_ping(args)
    elif args.command == "trace":
        if not args.trace_command:
            trace_p.print_help()
            return 1

        if args.trace_command == "show":
            return trace_show(args)
        elif args.trace_command == "list":
            return trace_list(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
