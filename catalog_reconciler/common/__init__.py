# Common utilities
from .config_loader import load_config, load_config_file, load_search_settings
from .csv_utils import write_csv
from .errors import (
    CatalogNotFoundError,
    CatalogParseError,
    CatalogWriteError,
    ConfigurationError,
    MissingCredentialError,
    ReconcilerError,
)
from .log_config import setup_logging
from .settings import ReconcilerSettings, SearchSettings
