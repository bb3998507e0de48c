"""
Asset catalog loader.
Reads an already-fetched price catalog snapshot from a YAML or JSON file.
"""

import os
import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from analysis.models import AssetSeries
from ingestion.transforms.validators import (
    validate_catalog_entry,
    check_equal_lengths,
    ValidationError
)
from ingestion.transforms.normalizers import normalize_catalog

# Load environment variables
load_dotenv()

# Set up logger
logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = './config/asset_catalog.yml'


class CatalogLoadError(Exception):
    """Raised when the asset catalog cannot be loaded."""
    pass


def resolve_catalog_path(catalog_path: Optional[str] = None) -> Path:
    """
    Pick the catalog file: explicit argument, then PORTFOLIO_CATALOG_PATH,
    then the default location.
    """
    if catalog_path is None:
        catalog_path = os.getenv('PORTFOLIO_CATALOG_PATH', DEFAULT_CATALOG_PATH)
    return Path(catalog_path)


def parse_catalog(raw: Any) -> Dict[str, AssetSeries]:
    """
    Validate and normalize a parsed catalog document.

    Accepts either {'assets': {key: entry}} (the pricing service response)
    or a bare {key: entry} mapping.

    Args:
        raw: Parsed YAML/JSON document

    Returns:
        Key -> AssetSeries, in document order

    Raises:
        CatalogLoadError: If the document or any entry is invalid
    """
    if not isinstance(raw, dict):
        raise CatalogLoadError("Asset catalog must be a mapping")

    assets = raw.get('assets', raw)
    if not isinstance(assets, dict) or not assets:
        raise CatalogLoadError("Asset catalog has no assets")

    for key, entry in assets.items():
        try:
            validate_catalog_entry(key, entry)
        except ValidationError as e:
            raise CatalogLoadError(f"Invalid catalog entry {key}: {e}")

    mismatched = check_equal_lengths({k: len(v['prices']) for k, v in assets.items()})
    if mismatched:
        # Still loadable; those assets just cannot be mixed with the rest
        logger.warning(f"Assets with non-standard history length: {', '.join(mismatched)}")

    return normalize_catalog(assets)


def load_asset_catalog(catalog_path: Optional[str] = None) -> Dict[str, AssetSeries]:
    """
    Load the asset catalog from disk.

    YAML is a superset of JSON, so both formats go through yaml.safe_load.

    Args:
        catalog_path: Path to the catalog file (defaults to env
            PORTFOLIO_CATALOG_PATH, then ./config/asset_catalog.yml)

    Returns:
        Key -> AssetSeries

    Raises:
        CatalogLoadError: If the file is missing, unreadable or invalid
    """
    catalog_file = resolve_catalog_path(catalog_path)
    if not catalog_file.exists():
        raise CatalogLoadError(f"Asset catalog file not found: {catalog_file}")

    try:
        with open(catalog_file, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogLoadError(f"Failed to read asset catalog: {e}")

    catalog = parse_catalog(raw)

    logger.info(f"Loaded {len(catalog)} assets from {catalog_file}")
    return catalog
