"""
Command-line entry point.

Usage:
    catalog-reconciler check-urls
    catalog-reconciler --root ../storefront --backup fix-local
    catalog-reconciler use-local
    catalog-reconciler search-remote            # needs PIXABAY_API_KEY
    catalog-reconciler reconcile --with-search
    catalog-reconciler hash-report --output artifacts/image-hash-report.json
    catalog-reconciler review

Exit codes:
    0 = job completed (including runs with zero changes)
    1 = fatal error (missing credential, missing or malformed catalog,
        write failure, unexpected exception)
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .common.config_loader import load_config, load_config_file, load_search_settings
from .common.errors import ReconcilerError
from .common.log_config import setup_logging
from .common.settings import ReconcilerSettings, SearchSettings
from .models import JobResult
from .reconciler import CatalogReconciler
from .resolution import PixabaySearchClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-reconciler",
        description="Reconcile product image URLs against the local catalog and images directory",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Project root containing the catalog and public images (default: cwd)",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="YAML config file (default: config/reconciler.yaml)",
    )
    parser.add_argument("--catalog", metavar="PATH", help="Catalog path relative to root")
    parser.add_argument("--images-dir", metavar="PATH", help="Images directory relative to root")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", action="store_true", help="Warnings and errors only")
    parser.add_argument("--log-file", metavar="PATH", help="Also write log records to this file")

    backup = parser.add_mutually_exclusive_group()
    backup.add_argument(
        "--backup", dest="backup", action="store_const", const=True,
        help="Copy the catalog to <catalog>.remote-backup-<ms> before writing",
    )
    backup.add_argument(
        "--no-backup", dest="backup", action="store_const", const=False,
        help="Never back up before writing",
    )

    write = parser.add_mutually_exclusive_group()
    write.add_argument(
        "--write-unchanged", dest="write_unchanged", action="store_const", const=True,
        help="Rewrite the catalog even when nothing changed",
    )
    write.add_argument(
        "--skip-unchanged", dest="write_unchanged", action="store_const", const=False,
        help="Leave the catalog untouched when nothing changed",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check-urls", help="HEAD-probe remote image URLs")
    subparsers.add_parser("use-local", help="Use <id>.jpg/.png/.jpeg from the images directory")

    fix = subparsers.add_parser("fix-local", help="Resolve local images across all naming schemes")
    fix.add_argument(
        "--no-cache-bust", dest="cache_bust", action="store_false", default=None,
        help="Do not append ?v=<ms> to rewritten URLs",
    )

    subparsers.add_parser("search-remote", help="Fill missing images from Pixabay")

    reconcile = subparsers.add_parser("reconcile", help="Local resolution, then optional search fallback")
    reconcile.add_argument(
        "--with-search", action="store_true",
        help="Search Pixabay for products with no local image",
    )
    reconcile.add_argument(
        "--no-cache-bust", dest="cache_bust", action="store_false", default=None,
        help="Do not append ?v=<ms> to rewritten URLs",
    )

    hash_report = subparsers.add_parser("hash-report", help="Write SHA-256 report and list duplicates")
    hash_report.add_argument("--output", metavar="PATH", help="Report path")

    review = subparsers.add_parser("review", help="Write image mapping CSV")
    review.add_argument("--output", metavar="PATH", help="CSV path")

    return parser


def _load_file_config(path: Optional[str]) -> dict:
    if path:
        return load_config_file(path)
    try:
        return load_config()
    except FileNotFoundError:
        logger.debug("No config file found, using defaults")
        return {}


def run(args: argparse.Namespace) -> JobResult:
    """
    Dispatch one job. Raises ReconcilerError subclasses for fatal errors.

    The search credential is validated before the catalog is touched.
    """
    config = _load_file_config(args.config)

    search_settings = None
    if args.command == "search-remote" or getattr(args, "with_search", False):
        search_settings = SearchSettings.from_env(load_search_settings(config))

    settings = ReconcilerSettings.from_config(
        args.root,
        config,
        catalog_path=args.catalog,
        images_dir=args.images_dir,
        backup_before_write=args.backup,
        write_unchanged=args.write_unchanged,
        cache_bust=getattr(args, "cache_bust", None),
    )
    reconciler = CatalogReconciler(settings)

    if args.command == "check-urls":
        return reconciler.check_urls()
    if args.command == "use-local":
        return reconciler.use_local()
    if args.command == "fix-local":
        return reconciler.fix_local()
    if args.command == "search-remote":
        with PixabaySearchClient(search_settings) as client:
            return reconciler.search_remote(client)
    if args.command == "reconcile":
        if search_settings is None:
            return reconciler.reconcile()
        with PixabaySearchClient(search_settings) as client:
            return reconciler.reconcile(client)
    if args.command == "hash-report":
        return reconciler.hash_report(Path(args.output) if args.output else None)
    if args.command == "review":
        return reconciler.review(Path(args.output) if args.output else None)

    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, run the job and return the process exit code."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    try:
        result = run(args)
    except ReconcilerError as e:
        logger.error("%s", e)
        print(f"ERROR: {e}")
        return 1
    except Exception:
        logger.exception("Unhandled error during %s", args.command)
        return 1

    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
