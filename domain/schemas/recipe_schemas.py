from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from domain.enums import EvaluationSystem


class RecipeCreate(BaseModel):
    """Schema for recording a new brew; legacy free text is accepted as-is"""

    recipe_name: Optional[str] = Field(None, description="Generated from origin and date when blank")
    is_favorite: bool = False

    # Bean information
    coffee_bean_brand: Optional[str] = Field(None, max_length=100)
    origin: str = Field(..., min_length=1, max_length=100)
    processing_method: str = Field(..., min_length=1, max_length=50)
    altitude: Optional[int] = Field(None, ge=0)
    roasting_date: Optional[datetime] = None
    roasting_level: Optional[str] = Field(None, max_length=20)

    # Brewing parameters
    water_temperature: Optional[Decimal] = None
    brewing_method: Optional[str] = Field(None, max_length=50)
    grinder_model: str = Field(..., min_length=1, max_length=100)
    grinder_unit: str = Field(..., min_length=1, max_length=50, description="Grinder setting")
    filtering_tools: Optional[str] = Field(None, max_length=100)
    turbulence: Optional[str] = Field(None, max_length=200)
    additional_notes: Optional[str] = None

    # Measurements
    coffee_beans: Decimal = Field(..., gt=0, description="Coffee dose in grams")
    water: Decimal = Field(..., gt=0, description="Water in grams")
    coffee_water_ratio: Optional[Decimal] = Field(None, gt=0)
    brewed_coffee_weight: Optional[Decimal] = Field(None, gt=0)
    tds: Optional[Decimal] = Field(None, ge=0)
    extraction_yield: Optional[Decimal] = Field(None, ge=0)

    overall_impression: Optional[int] = Field(None, ge=1, le=10)
    tasting_notes: Optional[str] = None
    evaluation_system: Optional[EvaluationSystem] = None

    model_config = {"from_attributes": True}
