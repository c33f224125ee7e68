from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Tuple
from datetime import datetime

class ProductRecord(BaseModel):
    """
    Point-in-time copy of a catalog product.
    Price is in minor currency units (cents). Snapshots are frozen so a
    ranking pass never observes a concurrent catalog write.
    """
    product_id: str
    title: str
    description: Optional[str] = None
    slug: Optional[str] = None
    price: int = Field(ge=0)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    tags: Tuple[str, ...] = ()
    stock: int = 0
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}  # immuable = safe

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_none_as_empty(cls, v):
        return () if v is None else v

class QueryFilter(BaseModel):
    # Bounds are inclusive; an inverted range is kept as-is and matches nothing
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    keywords: Tuple[str, ...] = ()
    model_config = {"frozen": True}

class RankedResult(BaseModel):
    product_id: str
    score: float = Field(ge=0)
    model_config = {"frozen": True} # immuable = safe

    def sort_key(self) -> tuple:
        """Score descending, then product id ascending."""
        return (-self.score, self.product_id)

class SearchResult(BaseModel):
    query: str
    parsed: QueryFilter
    items: List[RankedResult]
    count: int
    model_config = {"frozen": True}

class RecoResult(BaseModel):
    source_product_id: Optional[str] = None
    items: List[RankedResult]
    count: int
    model_config = {"frozen": True} # immuable = safe

class BehaviorEvent(BaseModel):
    """One user interaction with a product (view, add_to_cart, purchase)."""
    product_id: str
    event_type: str
    model_config = {"frozen": True}
