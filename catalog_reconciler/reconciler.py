"""
Catalog Reconciler

Batch jobs that reconcile product image references in the catalog against
the local images directory and remote sources.

Every job loads the catalog once, walks it in catalog order, and (for the
mutating jobs) persists it once at the end. Per-item failures are logged
and recorded on the JobResult; anything else propagates to the caller.

Jobs:
    check_urls     - HEAD-probe every remote image_url (report only)
    use_local      - LowercaseIdResolver pass, backup taken at start
    fix_local      - NumericSuffixResolver pass with cache-busting URLs
    search_remote  - Pixabay fallback for products without a remote URL
    reconcile      - fix_local strategies, then search fallback, one write
    hash_report    - SHA-256 report with duplicate groups (read-only)
    review         - image mapping CSV and HTML preview (catalog read-only)
"""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .catalog import backup_catalog, load_catalog, now_ms, save_catalog
from .common.constants import (
    HASH_REPORT_FILENAME,
    REVIEW_CSV_FILENAME,
    REVIEW_HTML_FILENAME,
    SAMPLE_SIZE,
)
from .common.settings import ReconcilerSettings
from .models import ImageChange, ItemError, JobResult, ProductRecord
from .reporting import (
    build_hash_report,
    build_review_rows,
    find_duplicate_groups,
    print_duplicate_summary,
    render_review_html,
    write_hash_report,
    write_review_csv,
    write_review_html,
)
from .resolution import (
    LocalResolver,
    LowercaseIdResolver,
    NumericSuffixResolver,
    PixabaySearchClient,
    UrlLivenessChecker,
    list_image_files,
)

logger = logging.getLogger(__name__)


def strip_query(url: Optional[str]) -> Optional[str]:
    """URL without its query string (cache-busting suffix)."""
    if not url:
        return url
    return url.split("?", 1)[0]


def apply_local_resolution(
    records: List[Dict[str, Any]],
    resolver: LocalResolver,
    site_prefix: str,
    cache_token: Optional[int] = None,
) -> List[ImageChange]:
    """
    Point image_url at the resolved local file for every matching product.

    A product counts as changed only when its current URL, ignoring any
    query string, differs from the resolved site path, so repeated runs
    against an unchanged directory produce no changes.

    Args:
        records: Catalog records, mutated in place
        resolver: Local resolution strategy
        site_prefix: Site-relative prefix, e.g. "/images/products/"
        cache_token: If set, appended as ?v=<token> to rewritten URLs

    Returns:
        Changes in catalog order
    """
    listing = list_image_files(resolver.images_dir)
    changes = []

    for record in records:
        if not isinstance(record, dict) or not record.get("id"):
            continue
        product_id = str(record["id"])
        filename = resolver.resolve(product_id, listing)
        if filename is None:
            continue

        site_path = f"{site_prefix}{filename}"
        current = record.get("image_url")
        if strip_query(current) == site_path:
            continue

        new_url = site_path if cache_token is None else f"{site_path}?v={cache_token}"
        record["image_url"] = new_url
        changes.append(ImageChange(id=product_id, old_url=current, new_url=new_url))

    return changes


class CatalogReconciler:
    """
    Runs reconciliation jobs against one project tree.

    Usage:
        settings = ReconcilerSettings.for_root("/path/to/storefront")
        reconciler = CatalogReconciler(settings)
        result = reconciler.fix_local()
        sys.exit(result.exit_code)
    """

    def __init__(
        self,
        settings: ReconcilerSettings,
        clock: Callable[[], int] = now_ms,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.clock = clock
        self.sleep = sleep

    # ── Persistence ───────────────────────────────────────────────────────

    def _load(self) -> List[Dict[str, Any]]:
        return load_catalog(self.settings.catalog_path)

    def _backup_enabled(self, default: bool) -> bool:
        backup = self.settings.backup_before_write
        return default if backup is None else backup

    def _backup(self, result: JobResult) -> None:
        result.backup_path = backup_catalog(self.settings.catalog_path, self.clock())
        print(f"Backup created at {result.backup_path}")

    def _persist(
        self,
        records: List[Dict[str, Any]],
        result: JobResult,
        backup_default: bool,
        write_unchanged_default: bool,
    ) -> None:
        """Back up (if enabled and not done yet) and rewrite the catalog when the write policy says so."""
        write_unchanged = self.settings.write_unchanged
        if write_unchanged is None:
            write_unchanged = write_unchanged_default
        if not result.changes and not write_unchanged:
            return

        if result.backup_path is None and self._backup_enabled(backup_default):
            self._backup(result)

        save_catalog(self.settings.catalog_path, records)
        result.wrote_catalog = True

    @staticmethod
    def _print_change_summary(result: JobResult) -> None:
        if result.changes:
            print(f"Updated {result.changed} products. Sample:")
            for change in result.changes[:SAMPLE_SIZE]:
                print(f"  {change.to_dict()}")
        else:
            print("No changes made")

    # ── Jobs ──────────────────────────────────────────────────────────────

    def check_urls(self, checker: Optional[UrlLivenessChecker] = None) -> JobResult:
        """HEAD-probe every http(s) image_url and report failures."""
        records = self._load()
        result = JobResult(job="check-urls")

        targets = []
        for record in records:
            if not isinstance(record, dict):
                continue
            product = ProductRecord.from_dict(record)
            if product.has_remote_image:
                targets.append(product)

        own_checker = checker is None
        if own_checker:
            checker = UrlLivenessChecker()
        try:
            for product in targets:
                check = checker.check(product.image_url)
                result.processed += 1
                logger.debug("%s %s", product.id, check.to_dict())
                if check.ok:
                    result.ok += 1
                    continue
                detail = check.error if check.error is not None else str(check.status)
                result.errors.append(ItemError(id=product.id, url=product.image_url, detail=detail))
                print(f"ERR {product.id} {product.image_url} {detail}")
        finally:
            if own_checker:
                checker.close()

        print(f"Checked {result.processed} URLs - OK: {result.ok}, ERR: {len(result.errors)}")
        if result.errors:
            print("Sample errors:")
            for error in result.errors[:SAMPLE_SIZE]:
                print(f"  {error.to_dict()}")
        return result

    def use_local(self) -> JobResult:
        """Lower-cased <id>.jpg/.png/.jpeg pass; backs up the catalog first by default."""
        records = self._load()
        result = JobResult(job="use-local", processed=len(records))
        if self._backup_enabled(True):
            self._backup(result)

        resolver = LowercaseIdResolver(self.settings.images_dir)
        result.changes = apply_local_resolution(
            records, resolver, self.settings.site_image_prefix
        )
        self._persist(records, result, backup_default=True, write_unchanged_default=False)
        self._print_change_summary(result)
        return result

    def fix_local(self) -> JobResult:
        """Numeric-suffix pass with cache-busting URLs; rewrites the catalog by default."""
        records = self._load()
        result = JobResult(job="fix-local", processed=len(records))

        resolver = NumericSuffixResolver(self.settings.images_dir)
        token = self.clock() if self.settings.cache_bust else None
        result.changes = apply_local_resolution(
            records, resolver, self.settings.site_image_prefix, token
        )
        self._persist(records, result, backup_default=False, write_unchanged_default=True)
        self._print_change_summary(result)
        return result

    def _search_pass(
        self,
        records: List[Dict[str, Any]],
        client: PixabaySearchClient,
        result: JobResult,
        exclude_ids: frozenset = frozenset(),
    ) -> None:
        """Assign the first search hit to products without a remote image_url."""
        settings = client.settings
        searched = 0

        for index, record in enumerate(records):
            if not isinstance(record, dict):
                continue
            product = ProductRecord.from_dict(record)
            label = product.id or index
            if product.has_remote_image or product.id in exclude_ids:
                continue
            query = product.search_query
            if not query:
                result.skipped += 1
                continue

            if searched:
                self.sleep(settings.delay_seconds)
            searched += 1
            result.processed += 1

            image_url = client.search(query)
            if image_url is None and settings.category_fallback and product.category \
                    and product.category != query:
                logger.info("No hit for %s, retrying with category %r", label, product.category)
                image_url = client.search(product.category)

            if image_url:
                record["image_url"] = image_url
                result.changes.append(
                    ImageChange(id=str(label), old_url=product.image_url, new_url=image_url)
                )
                print(f"Mapped {label} -> {image_url}")
            else:
                result.errors.append(ItemError(id=product.id, detail=f"no hit for {query!r}"))
                print(f"No pixabay hit for {label} ({query})")

    def search_remote(self, client: PixabaySearchClient) -> JobResult:
        """Pixabay fallback for every product whose image_url is not already remote."""
        records = self._load()
        result = JobResult(job="search-remote")

        self._search_pass(records, client, result)
        logger.info("Made %s Pixabay requests", client.requests_made)
        self._persist(records, result, backup_default=False, write_unchanged_default=False)
        if result.changes:
            print(f"Wrote {result.changed} image_url mappings to {self.settings.catalog_path.name}")
        else:
            print("No changes made.")
        return result

    def reconcile(self, client: Optional[PixabaySearchClient] = None) -> JobResult:
        """
        Full reconciliation run.

        Local numeric-suffix resolution first; products with no local file
        then fall through to the search fallback when a client is given.
        The catalog is written once.
        """
        records = self._load()
        result = JobResult(job="reconcile")

        resolver = NumericSuffixResolver(self.settings.images_dir)
        token = self.clock() if self.settings.cache_bust else None
        result.changes = apply_local_resolution(
            records, resolver, self.settings.site_image_prefix, token
        )

        if client is not None:
            listing = list_image_files(self.settings.images_dir)
            resolved = frozenset(
                str(r["id"]) for r in records
                if isinstance(r, dict) and r.get("id") and resolver.resolve(str(r["id"]), listing)
            )
            self._search_pass(records, client, result, exclude_ids=resolved)
        else:
            result.processed = len(records)

        self._persist(records, result, backup_default=False, write_unchanged_default=False)
        self._print_change_summary(result)
        return result

    def hash_report(self, output_path: Optional[Path] = None) -> JobResult:
        """Write the content-hash report and print duplicate groups."""
        records = self._load()
        entries = build_hash_report(records, self.settings.public_dir)
        output_path = output_path or self.settings.artifacts_dir / HASH_REPORT_FILENAME

        result = JobResult(job="hash-report", processed=len(entries))
        result.ok = sum(1 for e in entries if e.exists)
        result.artifact_path = write_hash_report(entries, output_path)
        print(f"Wrote report to {result.artifact_path}")

        print_duplicate_summary(find_duplicate_groups(entries))
        return result

    def review(self, output_path: Optional[Path] = None) -> JobResult:
        """Write the image review CSV and the HTML preview page."""
        records = self._load()
        rows = build_review_rows(records, self.settings.images_dir)
        output_path = output_path or self.settings.artifacts_dir / REVIEW_CSV_FILENAME

        result = JobResult(job="review", processed=len(rows))
        result.artifact_path = write_review_csv(rows, output_path)
        print(f"Wrote {result.artifact_path}")

        page = render_review_html(records, site_prefix=self.settings.site_image_prefix)
        html_paths = [
            write_review_html(page, self.settings.public_dir / REVIEW_HTML_FILENAME),
            write_review_html(page, self.settings.artifacts_dir / REVIEW_HTML_FILENAME),
        ]
        print(f"Wrote review HTML to {html_paths[0]} and {html_paths[1]}")
        return result
