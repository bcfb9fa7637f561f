#!/usr/bin/env python3
"""
FraudScan command line - score an email or a URL and print the result as JSON.

    fraudscan email --file message.txt
    cat message.txt | fraudscan email
    fraudscan url paypal-verify.ml
    fraudscan check admin@updatemybank.ru
"""

import argparse
import json
import sys
from typing import List, Optional

from fraudscan.core.input_sanitizer import sanitize_email_content, sanitize_url_input
from fraudscan.core.quick_check import quick_check
from fraudscan.core.rule_tables import load_rule_tables
from fraudscan.core.config import settings
from fraudscan.services.analysis_runner import ProgressEvent, run_analysis
from fraudscan.utils.startup import configure_logging


def _print_progress(event: ProgressEvent):
    print(f"[{event.percent:3d}%] {event.kind} {event.phase.value}", file=sys.stderr)


def _read_email(path: Optional[str]) -> str:
    if path:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    return sys.stdin.read()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fraudscan", description="Heuristic fraud risk scoring")
    parser.add_argument("--rules", help="JSON file extending the built-in rule tables")
    parser.add_argument("--progress", action="store_true", help="Report analysis phases on stderr")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")

    sub = parser.add_subparsers(dest="command", required=True)

    email_cmd = sub.add_parser("email", help="Analyze raw email text")
    email_cmd.add_argument("--file", help="Read the email from a file instead of stdin")

    url_cmd = sub.add_parser("url", help="Analyze a website URL")
    url_cmd.add_argument("url", help="URL or bare hostname")

    check_cmd = sub.add_parser("check", help="Quick verdict for an email address or website")
    check_cmd.add_argument("value", help="Email address or website")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    rules = load_rule_tables(args.rules or settings.RULES_FILE)
    on_progress = _print_progress if args.progress else None

    if args.command == "email":
        content, error = sanitize_email_content(_read_email(args.file))
        if error:
            print(error, file=sys.stderr)
            return 1
        output = run_analysis("email", content, rules, on_progress).to_dict()
    elif args.command == "url":
        url, error = sanitize_url_input(args.url)
        if error:
            print(error, file=sys.stderr)
            return 1
        output = run_analysis("url", url, rules, on_progress).to_dict()
    else:
        value, error = sanitize_url_input(args.value)
        if error:
            print(error.replace("URL", "Value"), file=sys.stderr)
            return 1
        output = quick_check(value, rules).to_dict()

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
