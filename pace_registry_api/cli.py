#!/usr/bin/env python3
"""
Command line tool for the PACE Student Registry.

``register`` and ``search`` talk to a running service through
:class:`PaceRegistryClient`.  ``check-log`` reads a student log file
directly, without a server, and reports how many students it holds and
how many lines would be skipped on startup, either because they are
malformed or because they repeat an earlier USN or email.  It exits 1
if any line would be skipped and never writes to the file.

Usage:
    python -m pace_registry_api.cli register 4PA21CS001 Asha 4pa21cs001@pace.edu.in --skills "go, rust"
    python -m pace_registry_api.cli search rust
    python -m pace_registry_api.cli check-log ./pace_students_db.txt
"""

import argparse
import json
import os
import sys
from typing import List, Optional

from pace_registry_api.app.core.storage import StudentLog
from pace_registry_api.app.services.student_store import StudentStore
from pace_registry_api.client import PaceRegistryClient


def _print_error(error: dict) -> None:
    code = error.get("code") or error.get("status_code") or "error"
    print(f"[!] {code}: {error.get('message')}", file=sys.stderr)


def cmd_register(args: argparse.Namespace) -> int:
    client = PaceRegistryClient(args.url)
    result, error = client.register(args.usn, args.name, args.email, args.skills)
    if error:
        _print_error(error)
        return 1
    print(result.get("message") if result else "Saved")
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    client = PaceRegistryClient(args.url)
    students, error = client.search(args.term)
    if error:
        _print_error(error)
        return 1
    print(json.dumps(students, indent=2, ensure_ascii=False))
    return 0


def cmd_check_log(args: argparse.Namespace) -> int:
    if not os.path.exists(args.path):
        print(f"[!] Log not found: {args.path}", file=sys.stderr)
        return 2
    log = StudentLog(args.path, fsync=False)
    store = StudentStore(log)
    count = store.load()
    print(
        f"{count} students, {log.skipped} malformed lines, "
        f"{store.skipped_duplicates} duplicate lines"
    )
    return 1 if log.skipped or store.skipped_duplicates else 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="PACE Student Registry tools.")
    ap.add_argument(
        "--url",
        default=os.getenv("PACE_REGISTRY_URL", "http://localhost:8080"),
        help="Base URL of the running service",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    reg = sub.add_parser("register", help="Register a student")
    reg.add_argument("usn")
    reg.add_argument("name")
    reg.add_argument("email")
    reg.add_argument("--skills", default="", help="Comma or space separated skills")
    reg.set_defaults(func=cmd_register)

    search = sub.add_parser("search", help="Search students by name or skill")
    search.add_argument("term", nargs="?", default="")
    search.set_defaults(func=cmd_search)

    check = sub.add_parser("check-log", help="Validate a student log file offline")
    check.add_argument("path")
    check.set_defaults(func=cmd_check_log)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
