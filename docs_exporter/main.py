#!/usr/bin/env python3
"""
Docs Exporter - print a documentation site to PDF.

This tool crawls every page under a URL path prefix with a headless
Playwright browser and prints each one to a clean, paginated PDF.

Usage:
    python -m docs_exporter.main --url https://example.com/docs/ --output ./pdf-out

Features:
    - Breadth-first link discovery restricted to a path scope
    - Navigation, sidebar and footer hidden in the printed output
    - Header with the page path, footer with page numbers
    - Concurrent export workers with retries
    - Discovered URLs cached in urls.json for later runs

Every option can also be set through the environment (START_URL,
SCOPE_PREFIX, CONCURRENCY, PAUSE_MS, OUTPUT_DIR, URLS_JSON, SEED_PATHS,
TRAVERSAL, DEBUG_SCREENSHOTS, HEADLESS); command line flags win.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from docs_exporter.crawler import ExportPipeline, PageRenderer
from docs_exporter.utils.cache import CacheError
from docs_exporter.utils.config import ExportConfig, TraversalPolicy
from docs_exporter.utils.log import (
    setup_logger,
    print_status,
    print_success,
    print_error,
    print_info
)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Options left out keep their environment or default value.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='docs_exporter',
        description='Crawl a documentation site and print every page to PDF',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s
    %(prog)s --url https://example.com/docs/ --scope /docs/ --output ./pdf-out
    %(prog)s -c 5 --pause-ms 0 --recrawl --traversal scope-only
        """
    )

    parser.add_argument(
        '--url', '-u',
        type=str,
        help='Start URL of the documentation (env START_URL)'
    )

    parser.add_argument(
        '--scope', '-s',
        type=str,
        help='URL path prefix of pages to export (env SCOPE_PREFIX, default: /docs/)'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output directory for PDFs (env OUTPUT_DIR, default: ./pdf-out)'
    )

    parser.add_argument(
        '--cache',
        type=str,
        help='Discovered URL cache file (env URLS_JSON, default: ./urls.json)'
    )

    parser.add_argument(
        '--concurrency', '-c',
        type=int,
        help='Concurrent export workers (env CONCURRENCY, default: 3)'
    )

    parser.add_argument(
        '--pause-ms',
        type=int,
        help='Pause per worker between exports in ms (env PAUSE_MS, default: 800)'
    )

    parser.add_argument(
        '--seed',
        action='append',
        dest='seeds',
        metavar='PATH',
        help='Extra seed path to crawl from; repeatable (env SEED_PATHS, comma-separated)'
    )

    parser.add_argument(
        '--traversal',
        choices=[p.value for p in TraversalPolicy],
        help='Follow all same-origin links or only in-scope ones (env TRAVERSAL, default: same-origin)'
    )

    parser.add_argument(
        '--recrawl',
        action='store_true',
        help='Ignore the URL cache and crawl again'
    )

    parser.add_argument(
        '--debug-screenshots',
        action='store_true',
        default=None,
        help='Save a screenshot of every crawled page under <output>/debug'
    )

    parser.add_argument(
        '--no-headless',
        action='store_true',
        help='Run browser in visible mode (useful for debugging)'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write logs to this file'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output except errors'
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ExportConfig:
    """
    Merge command line flags over the environment configuration.

    Raises:
        ConfigError: If a value is invalid
    """
    overrides = {
        'start_url': args.url,
        'scope_prefix': args.scope,
        'output_dir': args.output,
        'cache_file': args.cache,
        'concurrency': args.concurrency,
        'pause_ms': args.pause_ms,
        'seed_paths': args.seeds,
        'debug_screenshots': args.debug_screenshots,
    }
    if args.traversal:
        overrides['traversal'] = TraversalPolicy.parse(args.traversal)
    if args.no_headless:
        overrides['headless'] = False

    overrides = {k: v for k, v in overrides.items() if v is not None}
    return ExportConfig.from_env(**overrides)


def print_banner() -> None:
    """Print the application banner."""
    banner = """
╔═══════════════════════════════════════════════════════════════╗
║                       DOCS EXPORTER v1.0                      ║
║            Documentation Site to PDF, Page by Page            ║
╚═══════════════════════════════════════════════════════════════╝
    """
    print_status(banner, "bold cyan")


def print_summary(summary) -> None:
    """
    Print the run summary.

    Args:
        summary: RunSummary object
    """
    print("\n" + "=" * 60)
    print_success("EXPORT SUMMARY")
    print("=" * 60)
    print(f"  URLs:          {summary.urls}{' (from cache)' if summary.from_cache else ''}")
    print(f"  PDFs written:  {summary.exported}")
    print(f"  Failed:        {len(summary.failed)}")
    print(f"  Duration:      {summary.duration_seconds:.1f} seconds")
    print("=" * 60 + "\n")


async def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the docs exporter.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)

    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    setup_logger(level=log_level, log_file=args.log_file)

    if not args.quiet:
        print_banner()

    renderer = None
    try:
        config = build_config(args)

        if not args.quiet:
            print_info(f"Start URL: {config.start_url}")
            print_info(f"Scope: {config.scope_prefix} ({config.traversal.value} traversal)")
            print_info(f"Workers: {config.concurrency}, pause: {config.pause_ms} ms")

        renderer = PageRenderer(headless=config.headless)
        await renderer.start()

        pipeline = ExportPipeline(config, renderer, use_cache=not args.recrawl)
        summary = await pipeline.run()

        if not args.quiet:
            print_summary(summary)

        return 0

    except KeyboardInterrupt:
        print_error("\nExport interrupted by user")
        return 1
    except ValueError as e:
        print_error(f"Invalid input: {e}")
        return 1
    except CacheError as e:
        print_error(str(e))
        return 1
    except Exception as e:
        print_error(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1
    finally:
        if renderer:
            await renderer.stop()


def run() -> None:
    """Entry point wrapper for running as module."""
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
