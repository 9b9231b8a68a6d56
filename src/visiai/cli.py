"""
VisiAI CLI - score a public web page for visual clarity, accessibility,
readability, performance and UX, and manage stored scans.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import AnalyzerConfig
from .errors import ScanError
from .pipeline import ScanPipeline
from .repository import ScanRepository

logger = logging.getLogger("visiai")


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="visiai",
        description="VisiAI - composite web page quality scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  visiai scan https://example.com
  visiai scan https://example.com --no-save --output result.json
  visiai list --page 2 --limit 10
  visiai show 3f2c...
        """,
    )
    parser.add_argument("--data-dir", type=str, default=None, help="Scan storage directory (or set VISIAI_DATA_DIR)")
    parser.add_argument("--log-file", type=str, default=None, help="Also write logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="Capture and score a URL")
    scan.add_argument("url")
    scan.add_argument("--no-save", action="store_true", help="Do not persist the result")
    scan.add_argument("--output", type=str, default=None, help="Write the full result JSON to this file")

    lst = sub.add_parser("list", help="List stored scans, newest first")
    lst.add_argument("--page", type=int, default=1)
    lst.add_argument("--limit", type=int, default=20)
    lst.add_argument("--include-screenshot", action="store_true")

    show = sub.add_parser("show", help="Print one stored scan as JSON")
    show.add_argument("scan_id")

    delete = sub.add_parser("delete", help="Delete a stored scan")
    delete.add_argument("scan_id")

    sub.add_parser("health", help="Show which providers are configured")
    return parser


def print_summary(doc: dict) -> None:
    scores = doc.get("scores", {})
    print("=" * 60)
    print(f"🔗 {doc.get('url')}")
    if doc.get("id"):
        print(f"🆔 {doc['id']}")
    print("=" * 60)
    print(f"📈 OVERALL SCORE: {scores.get('overall')}/100")
    print(f"   Visual Clarity: {scores.get('visualClarity')}")
    print(f"   Accessibility:  {scores.get('accessibility')}")
    print(f"   Readability:    {scores.get('readability')}")
    print(f"   Performance:    {scores.get('focusAccuracy')}")
    print(f"   UX:             {scores.get('reimagineUX')}")
    fallbacks = doc.get("fallbacks") or {}
    for name, reason in fallbacks.items():
        print(f"   ⚠️ {name}: default record used ({reason})")
    print("\n💡 Recommendations:")
    for i, tip in enumerate(doc.get("recommendations", []), 1):
        print(f"  {i}. {tip}")


async def _scan(args, config: AnalyzerConfig, repo: ScanRepository) -> int:
    pipeline = ScanPipeline(config, repository=repo)
    doc = await pipeline.run(args.url, save=not args.no_save)
    print_summary(doc)
    if args.output:
        Path(args.output).write_text(json.dumps(doc, indent=2), encoding="utf-8")
        print(f"\n📄 Result written to: {args.output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    config = AnalyzerConfig.from_env()
    data_dir = Path(args.data_dir) if args.data_dir else config.data_dir
    repo = ScanRepository(data_dir)

    try:
        if args.command == "scan":
            return asyncio.run(_scan(args, config, repo))

        if args.command == "list":
            result = repo.list_scans(args.page, args.limit, include_screenshot=args.include_screenshot)
            print(json.dumps(result, indent=2))
            return 0

        if args.command == "show":
            doc = repo.get(args.scan_id)
            if doc is None:
                print(f"❌ Scan not found: {args.scan_id}")
                return 1
            print(json.dumps(doc, indent=2))
            return 0

        if args.command == "delete":
            if not repo.delete(args.scan_id):
                print(f"❌ Scan not found: {args.scan_id}")
                return 1
            print("✅ Scan deleted successfully")
            return 0

        if args.command == "health":
            print(json.dumps({"status": "ok", "providers": config.provider_status()}, indent=2))
            return 0
    except ScanError as e:
        print(f"❌ {e}")
        return 1
    except KeyboardInterrupt:
        print("\n⚠️ Interrupted by user")
        return 2
    except Exception:
        logger.exception("Scan failed with an unexpected error")
        return 1
    return 1


def run():
    """Entry point for the CLI."""
    # Ensure asyncio event loop compatibility on Windows
    if os.name == "nt":
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())
    sys.exit(main())


if __name__ == "__main__":
    run()
