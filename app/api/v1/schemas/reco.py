# api/v1/schemas/reco.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

class SearchRequest(BaseModel):
    query: str = Field(..., description="Free-text query, e.g. 'bluetooth headphones under 100'")

    @field_validator("query")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Search query is required")
        return v

class RankedItemOut(BaseModel):
    product_id: str
    score: float

class ParsedQueryOut(BaseModel):
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    keywords: List[str] = Field(default_factory=list)

class SearchResponse(BaseModel):
    query: str
    parsed: ParsedQueryOut
    items: List[RankedItemOut]
    count: int

class RecoResultOut(BaseModel):
    source_product_id: Optional[str] = None
    items: List[RankedItemOut]
    count: int
