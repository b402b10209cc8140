"""
Settlement-related Pydantic schemas.

This module contains schemas for exporting the merged settlement catalog.
"""

from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field

from backend.models.settlement import SettlementCatalog


class SettlementSchema(BaseModel):
    """One settlement with its postal codes."""
    
    name: str = Field(..., description="Settlement name")
    region_name: Optional[str] = Field(None, description="Region (county); null for Budapest and its districts")
    postal_codes: List[str] = Field(default_factory=list, description="Postal codes in order of first appearance")
    
    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "name": "Szeged",
                "region_name": "Csongrád-Csanád",
                "postal_codes": ["6720", "6721", "6722"]
            }
        }


class SettlementCatalogSchema(BaseModel):
    """The full catalog with summary counts."""
    
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc),
                                   description="Export timestamp")
    total: int = Field(..., description="Number of settlements")
    postal_code_total: int = Field(..., description="Number of settlement/postal code pairs")
    settlements: List[SettlementSchema] = Field(..., description="Settlements in registry order")
    
    @classmethod
    def from_catalog(cls, catalog: SettlementCatalog):
        """Create from a built catalog."""
        return cls(
            total=len(catalog),
            postal_code_total=catalog.postal_code_count(),
            settlements=[SettlementSchema.model_validate(s) for s in catalog.settlements()]
        )
