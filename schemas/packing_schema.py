from pydantic import BaseModel, Field
from typing import Dict, List, Optional

# Category name -> item names. Iteration order is display order.
PackingCategory = Dict[str, List[str]]

class GeneratePackingListRequest(BaseModel):
    """Schema for running the packing rules directly."""
    destination: str = Field(..., examples=["Miami Beach"])
    trip_type: str = Field(..., examples=["Leisure"])
    duration_days: int = Field(..., gt=0, examples=[7])
    start_date: str = Field(..., examples=["2025-06-01"])
    end_date: str = Field(..., examples=["2025-06-07"])

class PackingList(BaseModel):
    """Schema for returning a stored packing list."""
    id: str
    trip_id: str
    content: PackingCategory
    generated_by: str = "ai"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

class PackingListUpdate(BaseModel):
    """Schema for saving an edited packing list."""
    content: PackingCategory

class AddItemRequest(BaseModel):
    content: PackingCategory
    category: str
    item: str

class RemoveItemRequest(BaseModel):
    content: PackingCategory
    category: str
    index: int = Field(..., ge=0)

class AddCategoryRequest(BaseModel):
    content: PackingCategory
    category: str
