"""
Pydantic schemas for product request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime


class ProductBase(BaseModel):
    """Base Product schema with common catalog fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: float = Field(..., ge=0, description="Unit price (must be non-negative)")
    product_type: Optional[str] = Field(None, max_length=50, description="Product type, e.g. CONSOLE")
    platform: Optional[str] = Field(None, max_length=50, description="Platform, e.g. PC")
    category: Optional[str] = Field(None, max_length=100, description="Product category")
    images: List[str] = Field(default_factory=list, description="Image references")


class ProductCreate(ProductBase):
    """Schema for creating a new product with its initial stock"""
    stock: int = Field(..., ge=0, description="Initial available quantity (must be non-negative)")


class ProductUpdate(BaseModel):
    """Schema for updating catalog fields; stock only moves through reservations"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    product_type: Optional[str] = Field(None, max_length=50)
    platform: Optional[str] = Field(None, max_length=50)
    category: Optional[str] = Field(None, max_length=100)
    images: Optional[List[str]] = None


class ProductResponse(ProductBase):
    """Schema for product response"""
    id: int
    stock: int
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class ProductSummary(BaseModel):
    """Product fields shown next to an order line"""
    id: int
    name: str
    price: float
    product_type: Optional[str] = None
    platform: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    
    model_config = ConfigDict(from_attributes=True)
