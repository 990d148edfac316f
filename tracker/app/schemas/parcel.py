"""
Parcel Pydantic schemas.

Defines the input and output shapes of the parcel store.
"""

from pydantic import BaseModel, Field


class ParcelCreate(BaseModel):
    """Schema for creating a new parcel; the number is assigned by the database."""
    client: int = Field(..., description="Owning client identifier")
    status: str = Field(..., min_length=1, description="Status code, usually 'registered'")
    address: str = Field(..., description="Delivery address")
    created_at: str = Field(..., description="RFC3339 creation timestamp")


class ParcelResponse(BaseModel):
    """Schema for a stored parcel."""
    number: int
    client: int
    status: str
    address: str
    created_at: str
    
    class Config:
        from_attributes = True
