# flakeproof/cli/trace_cmd.py
"""
Trace commands: show, list
"""

import json
from pathlib import Path
from typing import List, Tuple

from flakeproof.core.trace import TraceRecord, load_trace_file


def _load(path: Path) -> TraceRecord:
    try:
        return load_trace_file(path)
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise ValueError(f"{path}: {e}") from e


def trace_show(args):
    """Pretty-print one trace file"""
    path = Path(args.trace)
    if not path.exists():
        print(f"Error: File not found: {path}")
        return 1

    try:
        record = _load(path)
    except ValueError as e:
        print(f"Error: Invalid trace file: {e}")
        return 1

    if args.json:
        print(json.dumps(record.to_dict(), ensure_ascii=False, indent=2))
        return 0

    print(f"Trace:    {record.trace_id}")
    print(f"Tool:     {record.tool_name}")
    print(f"Started:  {record.started_at}")
    print(f"Finished: {record.finished_at or '-'}")
    status = record.status.value if record.status else "-"
    code = record.code.value if record.code else "-"
    print(f"Outcome:  {status} / {code}")
    if record.message:
        print(f"Message:  {record.message}")
    print()

    print(f"Steps ({len(record.steps)}):")
    for i, step in enumerate(record.steps, 1):
        line = f"  {i:3d}. {step.ts}  {step.action:28s} {step.target}"
        if step.note:
            line += f"  ({step.note})"
        print(line)

    return 0


def trace_list(args):
    """List trace files in a directory, newest first"""
    root = Path(args.dir)
    if not root.is_dir():
        print(f"Error: Directory not found: {root}")
        return 1

    records: List[Tuple[TraceRecord, Path]] = []
    skipped = 0
    for path in root.glob("*.json"):
        try:
            records.append((_load(path), path))
        except ValueError:
            skipped += 1

    if not records:
        print("(no traces)")
        return 0

    records.sort(key=lambda item: item[0].started_at, reverse=True)
    limit = max(0, args.limit)

    print(f"{'STARTED':26s} {'TOOL':20s} {'STATUS':18s} {'CODE':20s} TRACE")
    for record, _ in records[:limit]:
        status = record.status.value if record.status else "-"
        code = record.code.value if record.code else "-"
        print(f"{record.started_at:26s} {record.tool_name:20s} {status:18s} {code:20s} {record.trace_id}")

    if len(records) > limit:
        print(f"... {len(records) - limit} more")
    if skipped:
        print(f"({skipped} unreadable file(s) skipped)")
    return 0
