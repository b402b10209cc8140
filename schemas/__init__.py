"""
Pydantic schemas for catalog export.

This package contains the Pydantic models used to serialize the final
settlement catalog for downstream consumers.
"""

from schemas.settlement_schema import SettlementSchema, SettlementCatalogSchema

__all__ = [
    'SettlementSchema',
    'SettlementCatalogSchema',
]
