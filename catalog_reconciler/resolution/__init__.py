"""
Image resolution strategies.

Modules:
    local_resolver - NumericSuffixResolver / LowercaseIdResolver for the images directory
    url_checker - UrlLivenessChecker (HEAD probes)
    image_search - PixabaySearchClient (remote fallback)
"""

from .image_search import PixabaySearchClient
from .local_resolver import (
    LocalResolver,
    LowercaseIdResolver,
    NumericSuffixResolver,
    list_image_files,
    numeric_suffix,
)
from .url_checker import UrlLivenessChecker

__all__ = [
    'LocalResolver',
    'NumericSuffixResolver',
    'LowercaseIdResolver',
    'list_image_files',
    'numeric_suffix',
    'UrlLivenessChecker',
    'PixabaySearchClient',
]
