#!/usr/bin/env python3
"""
Catalog Image Reconciliation

Runs one reconciliation job against the storefront tree.

Usage:
    python3 scripts/reconcile_images.py check-urls
    python3 scripts/reconcile_images.py fix-local
    python3 scripts/reconcile_images.py --backup use-local
    python3 scripts/reconcile_images.py search-remote
    python3 scripts/reconcile_images.py hash-report

Run with --help for all options.
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_reconciler.cli import main

if __name__ == "__main__":
    sys.exit(main())
