"""
Catalog Image Reconciler

Modules:
    models      - Data models (ProductRecord, JobResult, HashEntry, ...)
    common      - Shared utilities (settings, config loader, logging, errors)
    catalog     - Catalog JSON load / atomic save / backup
    resolution  - Image resolution strategies (local files, URL probes, Pixabay search)
    reporting   - Read-only reports (content hashes, image review CSV)
    reconciler  - The batch jobs
    cli         - Command-line entry point
"""

__version__ = "1.0.0"
