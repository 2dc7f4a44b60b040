"""
Shared constants for the reconciler.

Filesystem layout defaults, naming conventions and provider settings that
should have a single source of truth.
"""

# Repository-relative defaults (overridable from config/reconciler.yaml)
DEFAULT_CATALOG_PATH = "entities/products-data.json"
DEFAULT_IMAGES_DIR = "public/images/products"
DEFAULT_PUBLIC_DIR = "public"
DEFAULT_ARTIFACTS_DIR = "artifacts"

# Site-relative URL prefix under which the storefront serves product images
SITE_IMAGE_PREFIX = "/images/products/"

# Extension order matters: it is part of the resolver precedence policy
IMAGE_EXTENSIONS = ("jpg", "png", "webp", "jpeg")

# Backup file suffix: <catalog>.remote-backup-<unix-ms>
BACKUP_SUFFIX = ".remote-backup-"

# Pixabay image search
PIXABAY_API_URL = "https://pixabay.com/api/"
API_KEY_ENV_VARS = ("PIXABAY_API_KEY", "PIXABAY_KEY")
SEARCH_DELAY_SECONDS = 0.3
SEARCH_PER_PAGE = 3

# Number of failures / changes shown in console samples
SAMPLE_SIZE = 10

# Report artifact names
HASH_REPORT_FILENAME = "image-hash-report.json"
REVIEW_CSV_FILENAME = "image-mapping.csv"
REVIEW_HTML_FILENAME = "image-review.html"

# Products shown on the HTML review page
REVIEW_HTML_LIMIT = 20
