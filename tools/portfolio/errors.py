from __future__ import annotations


class PortfolioError(Exception):
    pass


class BuildError(PortfolioError):
    """Aborts the whole page build (manifest or template unusable)."""


class ManifestError(BuildError):
    pass


class FetchError(PortfolioError):
    """One project source could not be fetched."""
