"""
Exception types raised by the reconciliation jobs.

Per-item failures never use these: they are logged and recorded in the job
result. Everything here is fatal and ends the run with exit code 1.
"""


class ReconcilerError(Exception):
    """Base class for fatal reconciler errors."""


class ConfigurationError(ReconcilerError):
    """Invalid or incomplete configuration."""


class MissingCredentialError(ConfigurationError):
    """Required API credential is not set."""

    def __init__(self, env_vars):
        self.env_vars = tuple(env_vars)
        names = " or ".join(self.env_vars)
        super().__init__(f"Missing API credential: set {names} and re-run.")


class CatalogNotFoundError(ReconcilerError, FileNotFoundError):
    """Catalog file does not exist."""


class CatalogParseError(ReconcilerError, ValueError):
    """Catalog file is not a JSON array of product objects."""


class CatalogWriteError(ReconcilerError, OSError):
    """Catalog (or its backup) could not be written."""
