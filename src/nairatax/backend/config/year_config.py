"""Read the packaged tax year YAML files into validated schema models.

Every tax year is listed in ``data/manifest.yaml``; the newest listed year is
the default used when a request does not name one. Parsed results are cached
per process, so edits to the YAML files need :func:`clear_caches` (or a
restart) before they become visible.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from .schema import (
    BusinessTaxConfig,
    ConfigurationError,
    PersonalTaxConfig,
    RevenueBand,
    TaxBand,
    TaxYearManifest,
    TaxYearManifestEntry,
    YearConfiguration,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
MANIFEST_FILE = CONFIG_DIRECTORY / "manifest.yaml"

_LOGGER = logging.getLogger(__name__)


def _read_mapping(path: Path) -> dict[str, Any]:
    """Parse ``path`` as YAML, insisting on a top-level mapping."""

    with path.open("r", encoding="utf-8") as handle:
        document = yaml.safe_load(handle)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigurationError(f"{path.name} must contain a mapping at the top level")
    return document


@lru_cache(maxsize=1)
def load_manifest() -> TaxYearManifest:
    """Return the parsed year manifest."""

    if not MANIFEST_FILE.exists():
        raise FileNotFoundError(f"Tax year manifest not found at {MANIFEST_FILE}")

    try:
        return TaxYearManifest.model_validate(_read_mapping(MANIFEST_FILE))
    except ValidationError as error:
        raise ConfigurationError(f"Manifest validation failed: {error}") from error


def manifest_entries() -> Sequence[TaxYearManifestEntry]:
    return load_manifest().years


def available_years() -> Sequence[int]:
    """Return the declared tax years in ascending order."""

    return load_manifest().supported_years


def default_year() -> int:
    """Return the newest declared tax year."""

    years = available_years()
    if not years:
        raise ConfigurationError("Tax year manifest does not list any years")
    return years[-1]


def _configuration_path(year: int) -> Path:
    try:
        entry = load_manifest().get_entry(year)
    except KeyError as exc:
        raise FileNotFoundError(f"Tax year {year} is not declared in the manifest") from exc

    path = CONFIG_DIRECTORY / entry.resolved_filename
    if not path.exists():
        raise FileNotFoundError(f"Tax year {year} is declared but {path.name} is missing")
    return path


@lru_cache(maxsize=8)
def load_year_configuration(year: int) -> YearConfiguration:
    """Return the validated personal and business settings for ``year``.

    Raises ``FileNotFoundError`` for years the manifest does not cover and
    :class:`ConfigurationError` when the YAML content is invalid.
    """

    path = _configuration_path(year)
    document = _read_mapping(path)
    # The file may omit its year; the manifest entry supplies it.
    document.setdefault("year", year)

    try:
        configuration = YearConfiguration.model_validate(document)
    except ValidationError as error:
        raise ConfigurationError(
            f"Tax year {year} validation failed ({path.name}): {error}"
        ) from error

    if configuration.year != year:
        raise ConfigurationError(
            f"Tax year mismatch in {path.name}: manifest says {year}, "
            f"file says {configuration.year}"
        )

    _LOGGER.debug(
        "Loaded tax year %s from %s (%d personal band(s), %d revenue band(s))",
        year,
        path.name,
        len(configuration.personal.bands),
        len(configuration.business.revenue_bands),
    )
    return configuration


def clear_caches() -> None:
    """Forget cached manifest and year configurations."""

    load_year_configuration.cache_clear()
    load_manifest.cache_clear()


__all__ = [
    "BusinessTaxConfig",
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "MANIFEST_FILE",
    "PersonalTaxConfig",
    "RevenueBand",
    "TaxBand",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "YearConfiguration",
    "available_years",
    "clear_caches",
    "default_year",
    "load_manifest",
    "load_year_configuration",
    "manifest_entries",
]
