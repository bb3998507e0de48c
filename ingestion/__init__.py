"""
Catalog Ingestion Module

Loads and validates the asset catalog snapshot used by the engine:
- YAML/JSON catalog files
- Entry validation (prices, yield, display fields)
- Normalization to AssetSeries records and allocation points
"""

__version__ = "0.1.0"
