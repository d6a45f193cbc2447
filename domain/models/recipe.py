"""
Recipe model - one brewing session.
"""

import uuid
from sqlalchemy import (
    Column,
    String,
    Integer,
    Text,
    TIMESTAMP,
    Numeric,
    Boolean,
    CheckConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.config import settings
from domain.models.database import Base, JSONList


def _range_check(column: str, low, high, name: str = None) -> CheckConstraint:
    return CheckConstraint(
        f"{column} >= {low} AND {column} <= {high}",
        name=name or f"recipes_{column}_check",
    )


def evaluation_system_check_sql(allowed_values) -> str:
    """SQL body of the evaluation_system check constraint for an allow-list"""
    literals = ", ".join("'" + value.replace("'", "''") + "'" for value in allowed_values)
    return f"evaluation_system IN ({literals})"


LEGACY_SCORE_COLUMNS = (
    "overall_impression", "acidity", "body", "sweetness", "flavor", "aftertaste", "balance",
)
SCA_QUALITY_COLUMNS = (
    "sca_fragrance", "sca_aroma", "sca_flavor", "sca_aftertaste",
    "sca_acidity_quality", "sca_body_quality", "sca_balance", "sca_overall",
)
CVA_DESC_INTENSITY_COLUMNS = (
    "cva_desc_fragrance", "cva_desc_aroma", "cva_desc_flavor", "cva_desc_aftertaste",
    "cva_desc_acidity", "cva_desc_sweetness", "cva_desc_mouthfeel",
)
QUICK_TASTING_INTENSITY_COLUMNS = (
    "quick_tasting_flavor_intensity", "quick_tasting_aftertaste_intensity",
    "quick_tasting_acidity_intensity", "quick_tasting_sweetness_intensity",
    "quick_tasting_mouthfeel_intensity",
)
CVA_AFF_QUALITY_COLUMNS = (
    "cva_aff_fragrance", "cva_aff_aroma", "cva_aff_flavor", "cva_aff_aftertaste",
    "cva_aff_acidity", "cva_aff_sweetness", "cva_aff_mouthfeel", "cva_aff_overall",
)


class Recipe(Base):
    """
    Brewing recipe with bean info, brewing parameters, measurements and one
    evaluation rubric selected by evaluation_system.
    """

    __tablename__ = "recipes"

    recipe_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipe_name = Column(String(200))
    date_created = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    date_modified = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
    is_favorite = Column(Boolean, default=False)

    # Bean information
    coffee_bean_brand = Column(String(100))
    origin = Column(String(100), nullable=False)
    processing_method = Column(String(50), nullable=False)
    altitude = Column(Integer)
    roasting_date = Column(TIMESTAMP(timezone=True))
    roasting_level = Column(String(20))

    # Brewing parameters
    water_temperature = Column(Numeric(5, 2))
    brewing_method = Column(String(50))
    grinder_model = Column(String(100), nullable=False)
    grinder_unit = Column(String(50), nullable=False)
    filtering_tools = Column(String(100))
    turbulence = Column(String(200))
    additional_notes = Column(Text)

    # Measurements
    coffee_beans = Column(Numeric(8, 2), nullable=False)
    water = Column(Numeric(8, 2), nullable=False)
    coffee_water_ratio = Column(Numeric(6, 2))
    brewed_coffee_weight = Column(Numeric(8, 2))
    tds = Column(Numeric(5, 2))
    extraction_yield = Column(Numeric(5, 2))

    # Legacy sensation record (1-10)
    overall_impression = Column(Integer)
    acidity = Column(Integer)
    body = Column(Integer)
    sweetness = Column(Integer)
    flavor = Column(Integer)
    aftertaste = Column(Integer)
    balance = Column(Integer)
    tasting_notes = Column(Text)

    evaluation_system = Column(String(20))

    # Traditional SCA cupping form (6-10, 0.25 steps)
    sca_fragrance = Column(Numeric(4, 2))
    sca_aroma = Column(Numeric(4, 2))
    sca_flavor = Column(Numeric(4, 2))
    sca_aftertaste = Column(Numeric(4, 2))
    sca_acidity_quality = Column(Numeric(4, 2))
    sca_acidity_intensity = Column(String(10))
    sca_body_quality = Column(Numeric(4, 2))
    sca_body_level = Column(String(10))
    sca_balance = Column(Numeric(4, 2))
    sca_overall = Column(Numeric(4, 2))
    sca_uniformity = Column(Integer)
    sca_clean_cup = Column(Integer)
    sca_sweetness = Column(Integer)
    sca_taint_defects = Column(Integer)
    sca_fault_defects = Column(Integer)
    sca_final_score = Column(Numeric(4, 2))

    # CVA Descriptive assessment (0-15 intensity)
    cva_desc_fragrance = Column(Integer)
    cva_desc_aroma = Column(Integer)
    cva_desc_flavor = Column(Integer)
    cva_desc_aftertaste = Column(Integer)
    cva_desc_acidity = Column(Integer)
    cva_desc_sweetness = Column(Integer)
    cva_desc_mouthfeel = Column(Integer)
    cva_desc_fragrance_aroma_descriptors = Column(JSONList, default=list)
    cva_desc_flavor_aftertaste_descriptors = Column(JSONList, default=list)
    cva_desc_main_tastes = Column(JSONList, default=list)
    cva_desc_mouthfeel_descriptors = Column(JSONList, default=list)
    cva_desc_acidity_descriptors = Column(Text)
    cva_desc_sweetness_descriptors = Column(Text)
    cva_desc_additional_notes = Column(Text)
    cva_desc_roast_level = Column(String(100))
    cva_desc_assessment_date = Column(TIMESTAMP(timezone=True))
    cva_desc_assessor_id = Column(String(100))

    # Quick tasting
    quick_tasting_flavor_intensity = Column(Integer)
    quick_tasting_aftertaste_intensity = Column(Integer)
    quick_tasting_acidity_intensity = Column(Integer)
    quick_tasting_sweetness_intensity = Column(Integer)
    quick_tasting_mouthfeel_intensity = Column(Integer)
    quick_tasting_flavor_aftertaste_descriptors = Column(JSONList, default=list)
    quick_tasting_overall_quality = Column(Integer)

    # CVA Affective assessment (1-9 quality)
    cva_aff_fragrance = Column(Integer)
    cva_aff_aroma = Column(Integer)
    cva_aff_flavor = Column(Integer)
    cva_aff_aftertaste = Column(Integer)
    cva_aff_acidity = Column(Integer)
    cva_aff_sweetness = Column(Integer)
    cva_aff_mouthfeel = Column(Integer)
    cva_aff_overall = Column(Integer)
    cva_aff_non_uniform_cups = Column(Integer)
    cva_aff_defective_cups = Column(Integer)
    cva_aff_score = Column(Numeric(5, 2))

    collection_links = relationship(
        "RecipeCollection", back_populates="recipe", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint(
            evaluation_system_check_sql(settings.evaluation_systems),
            name="recipes_evaluation_system_check",
        ),
        CheckConstraint(
            "sca_acidity_intensity IN ('High', 'Medium', 'Low')",
            name="recipes_sca_acidity_intensity_check",
        ),
        CheckConstraint(
            "sca_body_level IN ('Heavy', 'Medium', 'Thin')",
            name="recipes_sca_body_level_check",
        ),
        *(_range_check(column, 1, 10) for column in LEGACY_SCORE_COLUMNS),
        *(_range_check(column, 6, 10) for column in SCA_QUALITY_COLUMNS),
        _range_check("sca_final_score", 36, 100),
        *(_range_check(column, 0, 15) for column in CVA_DESC_INTENSITY_COLUMNS),
        *(_range_check(column, 0, 15) for column in QUICK_TASTING_INTENSITY_COLUMNS),
        _range_check("quick_tasting_overall_quality", 1, 9),
        *(_range_check(column, 1, 9) for column in CVA_AFF_QUALITY_COLUMNS),
        _range_check("cva_aff_non_uniform_cups", 0, 5),
        _range_check("cva_aff_defective_cups", 0, 5),
        _range_check("cva_aff_score", 0, 100),
    )

    def __repr__(self) -> str:
        return f"<Recipe {self.recipe_id} {self.recipe_name!r}>"
