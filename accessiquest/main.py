#!/usr/bin/env python3
"""
AccessiQuest - accessibility checks for markup snippets.

Runs the comprehensive audit, a single learning-activity check, or a
color contrast computation from the command line.

Usage:
    python main.py audit page.html --fail-under 90
    python main.py verify exercise.html --activity heading
    python main.py contrast "#333333" white
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from accessiquest.analyzer import (
    ActivityType,
    ContrastLevel,
    IssueLevel,
    check_wcag_compliance,
    compute_contrast,
    run_audit,
    verify_activity,
)
from accessiquest.utils.log import (
    console,
    setup_logger,
    print_status,
    print_success,
    print_error,
    print_warning,
    print_info,
)


SEVERITY_STYLES = {
    IssueLevel.ERROR: "bold red",
    IssueLevel.WARNING: "yellow",
    IssueLevel.INFO: "cyan",
}


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='accessiquest',
        description='Check markup snippets for accessibility issues',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s audit page.html
    %(prog)s audit - --json < page.html
    %(prog)s verify exercise.html --activity tab-order
    %(prog)s contrast "#777777" "#808080"
        """
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output except the verdict and errors'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write logs to this file'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    audit = subparsers.add_parser('audit', help='Run the comprehensive audit')
    audit.add_argument('file', help="File to audit ('-' reads stdin)")
    audit.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )
    audit.add_argument(
        '--fail-under',
        type=int,
        default=None,
        help='Exit with an error when the score is below this value'
    )

    verify = subparsers.add_parser('verify', help='Check one learning activity')
    verify.add_argument('file', help="File to check ('-' reads stdin)")
    verify.add_argument(
        '--activity', '-a',
        required=True,
        choices=[activity.value for activity in ActivityType],
        help='Activity type to verify'
    )
    verify.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )

    contrast = subparsers.add_parser('contrast', help='Compute a color contrast ratio')
    contrast.add_argument('foreground', help='Text color (hex, rgb() or name)')
    contrast.add_argument('background', help='Background color (hex, rgb() or name)')
    contrast.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )

    return parser.parse_args(argv)


def read_source(path: str) -> str:
    """
    Read the markup to analyze.

    Args:
        path: File path, or '-' for stdin

    Returns:
        File contents

    Raises:
        ValueError: If the file cannot be read
    """
    if path == '-':
        return sys.stdin.read()

    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()
    except OSError as e:
        raise ValueError(f"Cannot read {path}: {e.strerror or e}") from e


def print_json(data: dict) -> None:
    """Print a result as stable, indented JSON."""
    print(json.dumps(data, indent=2, sort_keys=True))


def print_audit(result, quiet: bool = False) -> None:
    """
    Print the audit report.

    Args:
        result: AuditResult to print
        quiet: Only print the verdict line
    """
    verdict = f"Score: {result.score}/100"
    if result.passed:
        print_success(f"PASSED - {verdict}")
    else:
        print_error(f"FAILED - {verdict}")

    if quiet:
        return

    print_info(
        f"{result.errors_count} errors, {result.warnings_count} warnings, "
        f"{len(result.issues)} issues total"
    )

    if result.issues:
        table = Table(title="Accessibility issues", show_lines=False)
        table.add_column("Severity")
        table.add_column("Rule")
        table.add_column("Message")
        table.add_column("Suggestion")

        for issue in result.issues:
            style = SEVERITY_STYLES[issue.level]
            table.add_row(
                f"[{style}]{issue.level.value}[/{style}]",
                issue.rule_id,
                escape(issue.message),
                escape(issue.suggestion),
            )
        console.print(table)


def print_activity(activity: str, result, quiet: bool = False) -> None:
    """Print an activity verdict with remediation and announcement."""
    if result.passed:
        print_success(f"{activity}: {result.message}")
    else:
        print_error(f"{activity}: {result.message}")

    if quiet:
        return

    for detail in result.details:
        print_status(f"  - {detail}", "white")

    if result.announcement:
        print_info(f"Screen reader: {result.announcement}")


def print_contrast(result, compliance: dict) -> None:
    """Print a contrast ratio with its per-level compliance."""
    label = "Fails WCAG" if result.level == ContrastLevel.FAIL else f"WCAG {result.level.value}"
    if result.passes:
        print_success(f"Contrast ratio {result.ratio:g}:1 ({label})")
    else:
        print_warning(f"Contrast ratio {result.ratio:g}:1 ({label})")

    table = Table(title="WCAG compliance")
    table.add_column("Level")
    table.add_column("Normal text")
    table.add_column("Large text")
    table.add_row(
        "AA",
        "pass" if compliance['aa_normal'] else "fail",
        "pass" if compliance['aa_large'] else "fail",
    )
    table.add_row(
        "AAA",
        "pass" if compliance['aaa_normal'] else "fail",
        "pass" if compliance['aaa_large'] else "fail",
    )
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the command line.

    Returns:
        Exit code (0 when the check passed, 1 otherwise)
    """
    args = parse_arguments(argv)

    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    setup_logger(level=log_level, log_file=args.log_file)

    try:
        if args.command == 'contrast':
            result = compute_contrast(args.foreground, args.background)
            if args.json:
                print_json(result.to_dict())
            else:
                print_contrast(result, check_wcag_compliance(args.foreground, args.background))
            return 0 if result.passes else 1

        source = read_source(args.file)

        if args.command == 'audit':
            result = run_audit(source)
            if args.json:
                print_json(result.to_dict())
            else:
                print_audit(result, quiet=args.quiet)

            if args.fail_under is not None and result.score < args.fail_under:
                if not args.json:
                    print_error(f"Score {result.score} is below the required {args.fail_under}")
                return 1
            return 0 if result.passed else 1

        result = verify_activity(source, args.activity)
        if args.json:
            print_json(result.to_dict())
        else:
            print_activity(args.activity, result, quiet=args.quiet)
        return 0 if result.passed else 1

    except KeyboardInterrupt:
        print_error("\nInterrupted by user")
        return 1
    except ValueError as e:
        print_error(f"Invalid input: {e}")
        return 1


def run() -> None:
    """Entry point wrapper for running as module."""
    sys.exit(main())


if __name__ == '__main__':
    run()
