"""
CLI entrypoint for Focus Firewall.

Provides command-line interface for keyword inspection, one-shot page
scans and the goal/toggle settings.
"""

import sys
import os
import argparse
import asyncio
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from focusfirewall.classify import ScanCoordinator, extract_keywords
from focusfirewall.engine import FocusState
from focusfirewall.page import EngineConfig, HostDocument, load_config
from focusfirewall.storage import SettingsHub, SET_GOAL, SET_ENABLED


DEFAULT_DB_PATH = "data/db/focusfirewall.sqlite3"


def default_db_path() -> str:
    return os.getenv("FOCUSFIREWALL_DB", DEFAULT_DB_PATH)


def resolve_config(path) -> EngineConfig:
    """Load the YAML config given on the command line or in FOCUSFIREWALL_CONFIG."""
    path = path or os.getenv("FOCUSFIREWALL_CONFIG")
    if not path:
        return EngineConfig()
    return load_config(path)


def print_summary(results: dict, state: FocusState) -> None:
    """Print scan summary to console."""
    print("\n" + "=" * 60)
    print("SCAN SUMMARY")
    print("=" * 60)

    print(f"\nGoal: {state.goal or '(none)'}")
    print(f"Keywords: {', '.join(sorted(state.keywords)) or '(none)'}")
    print(f"Filtering: {'enabled' if state.enabled else 'disabled'}")

    if not state.is_active:
        print(f"\n[INFO] Nothing classified; cleared {results['cleared']} mark(s)")
    else:
        print(f"\nExamined: {results['examined']}")
        print(f"[OK] Relevant: {results['relevant']}")
        print(f"[INFO] Irrelevant: {results['irrelevant']}")
        print(f"[SKIP] No title: {results['skipped']}")

    print(f"[FAIL] Errors: {results['errors']}")


def keywords_command(args) -> int:
    """
    Execute the keywords command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    keywords = extract_keywords(args.text)

    if not keywords:
        print("[INFO] No keywords (every title counts as relevant)")
        return 0

    for keyword in sorted(keywords):
        print(keyword)

    return 0


async def scan_command(args) -> int:
    """
    Execute the scan command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config = resolve_config(args.config)
    except Exception as e:
        print(f"[ERROR] Failed to load configuration: {e}")
        return 1

    try:
        document = HostDocument.from_file(args.page, url=args.url)
        print(f"[OK] Loaded page: {args.page}")
    except Exception as e:
        print(f"[ERROR] Failed to load page: {e}")
        return 1

    # Goal from the command line wins over stored settings
    if args.goal is not None:
        state = FocusState(goal=args.goal, enabled=not args.disabled)
    else:
        hub = SettingsHub(args.db)
        try:
            state = await hub.fetch_state() or FocusState()
        finally:
            hub.close()

        if args.disabled:
            state = FocusState(goal=state.goal, enabled=False)

    coordinator = ScanCoordinator(document, config)

    try:
        results = coordinator.scan(state.keywords, state.enabled)
    except KeyboardInterrupt:
        print("\n\n[INTERRUPTED] Scan cancelled by user")
        return 130

    print_summary(results, state)

    if args.output:
        coordinator.annotator.install_styles()
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(document.to_html(), encoding="utf-8")
        print(f"\n[REPORT] Annotated page written to: {output_path}")

    return 0


def state_command(args) -> int:
    """Print the stored goal and enabled flag."""
    hub = SettingsHub(args.db)

    try:
        state = hub.get_state()
    finally:
        hub.close()

    print(f"Goal: {state.goal or '(none)'}")
    print(f"Enabled: {'yes' if state.enabled else 'no'}")
    print(f"Keywords: {', '.join(sorted(state.keywords)) or '(none)'}")
    return 0


async def settings_command(args) -> int:
    """
    Execute the set-goal / set-enabled commands.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args.command == "set-goal":
        message = {"type": SET_GOAL, "goal": args.goal.strip()}
    else:
        message = {"type": SET_ENABLED, "isEnabled": args.value == "on"}

    hub = SettingsHub(args.db)

    try:
        response = await hub.handle_message(message)
    except Exception as e:
        print(f"[ERROR] Failed to update settings: {e}")
        return 1
    finally:
        hub.close()

    if not response or not response.get("success"):
        print("[ERROR] Settings store rejected the update")
        return 1

    if args.command == "set-goal":
        print(f"[OK] Goal set: {message['goal'] or '(none)'}")
    else:
        print(f"[OK] Filtering {'enabled' if message['isEnabled'] else 'disabled'}")

    return 0


def main(argv=None):
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Focus Firewall - hide content that is irrelevant to your current goal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the keywords derived from a goal
  focusfirewall keywords "learn rust programming"

  # Annotate a saved page against an explicit goal
  focusfirewall scan page.html --goal "rust" --output annotated.html

  # Store a goal, then scan with stored settings
  focusfirewall set-goal "learn rust programming"
  focusfirewall scan page.html

  # Switch filtering off
  focusfirewall set-enabled off

Environment Variables:
  FOCUSFIREWALL_DB       Settings database (default: data/db/focusfirewall.sqlite3)
  FOCUSFIREWALL_CONFIG   YAML file with selectors and timing (default: built-in)
        """,
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # keywords command
    keywords_parser = subparsers.add_parser(
        "keywords",
        help="Print the keywords extracted from a goal text",
    )

    keywords_parser.add_argument("text", type=str, help="Goal text")

    # scan command
    scan_parser = subparsers.add_parser(
        "scan",
        help="Classify and annotate the content items of a saved page",
    )

    scan_parser.add_argument("page", type=str, help="Path to an HTML page")

    scan_parser.add_argument(
        "--goal",
        type=str,
        help="Goal text (default: stored goal)",
    )

    scan_parser.add_argument(
        "--disabled",
        action="store_true",
        help="Scan as if filtering were switched off (clears all marks)",
    )

    scan_parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML config (default: $FOCUSFIREWALL_CONFIG or built-in)",
    )

    scan_parser.add_argument(
        "--db",
        type=str,
        default=default_db_path(),
        help=f"Path to settings database (default: {DEFAULT_DB_PATH})",
    )

    scan_parser.add_argument(
        "--url",
        type=str,
        help="Address to report for the page (default: file URI)",
    )

    scan_parser.add_argument(
        "--output",
        type=str,
        help="Write the annotated page to this path",
    )

    # state command
    state_parser = subparsers.add_parser(
        "state",
        help="Show the stored goal and enabled flag",
    )

    state_parser.add_argument(
        "--db",
        type=str,
        default=default_db_path(),
        help=f"Path to settings database (default: {DEFAULT_DB_PATH})",
    )

    # set-goal command
    goal_parser = subparsers.add_parser(
        "set-goal",
        help="Store a new focus goal",
    )

    goal_parser.add_argument("goal", type=str, help="Goal text (empty string clears it)")

    goal_parser.add_argument(
        "--db",
        type=str,
        default=default_db_path(),
        help=f"Path to settings database (default: {DEFAULT_DB_PATH})",
    )

    # set-enabled command
    enabled_parser = subparsers.add_parser(
        "set-enabled",
        help="Switch filtering on or off",
    )

    enabled_parser.add_argument("value", choices=["on", "off"], help="New state")

    enabled_parser.add_argument(
        "--db",
        type=str,
        default=default_db_path(),
        help=f"Path to settings database (default: {DEFAULT_DB_PATH})",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "keywords":
        return keywords_command(args)
    elif args.command == "scan":
        return asyncio.run(scan_command(args))
    elif args.command == "state":
        return state_command(args)
    elif args.command in ("set-goal", "set-enabled"):
        return asyncio.run(settings_command(args))
    else:
        print(f"[ERROR] Unknown command: {args.command}")
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
