"""
Domain enums for the Coffee Tracker application.
Contains the closed value sets used by recipes and by the legacy data migrations.
"""

import enum


class CoffeeOrigin(str, enum.Enum):
    """Top coffee-producing countries, grouped by continent in vocabulary.ORIGIN_GROUPS"""

    # South America
    BRAZIL = "Brazil"
    COLOMBIA = "Colombia"
    PERU = "Peru"
    ECUADOR = "Ecuador"

    # Central America & Mexico
    GUATEMALA = "Guatemala"
    MEXICO = "Mexico"
    HONDURAS = "Honduras"
    COSTA_RICA = "Costa Rica"
    NICARAGUA = "Nicaragua"

    # Africa
    ETHIOPIA = "Ethiopia"
    KENYA = "Kenya"
    RWANDA = "Rwanda"

    # Asia & Oceania
    INDONESIA = "Indonesia"
    VIETNAM = "Vietnam"
    YEMEN = "Yemen"


class ProcessingMethod(str, enum.Enum):
    """Post-harvest processing methods"""

    WASHED = "Washed"
    NATURAL = "Natural"
    HONEY = "Honey"
    SEMI_WASHED = "Semi-Washed"
    ANAEROBIC = "Anaerobic"
    CARBONIC_MACERATION = "Carbonic Maceration"
    EXPERIMENTAL = "Experimental"


class GrinderModel(str, enum.Enum):
    """Popular non-machine grinders; OTHERS enables custom text"""

    BARATZA_ENCORE = "Baratza Encore"
    COMANDANTE_C40 = "Comandante C40"
    TIMEMORE_C2 = "Timemore C2"
    BARATZA_VIRTUOSO_PLUS = "Baratza Virtuoso+"
    ONEZPRESSO_JX_PRO = "1Zpresso JX-Pro"
    HARIO_MINI_MILL = "Hario Mini Mill"
    PORLEX_MINI = "Porlex Mini"
    BARATZA_VARIO = "Baratza Vario"
    TIMEMORE_C3 = "Timemore C3"
    KNOCK_FELDGRIND = "Knock Feldgrind"
    OTHERS = "Others"


class FilteringTool(str, enum.Enum):
    """Filter material categories"""

    PAPER = "Paper"
    METAL = "Metal"
    CLOTH = "Cloth"


class EvaluationSystem(str, enum.Enum):
    """Tasting rubric used for a recipe; selects which evaluation columns are populated"""

    LEGACY = "legacy"
    TRADITIONAL_SCA = "traditional-sca"
    CVA_DESCRIPTIVE = "cva-descriptive"
    CVA_AFFECTIVE = "cva-affective"
    QUICK_TASTING = "quick-tasting"


class MigrationDomain(str, enum.Enum):
    """Recipe fields that have a legacy free-text to canonical value migration"""

    ORIGIN = "origin"
    PROCESSING_METHOD = "processingMethod"
    GRINDER_MODEL = "grinderModel"
    GRINDER_SETTING = "grinderSetting"
    FILTERING_TOOL = "filteringTool"
    WATER_TEMPERATURE = "waterTemperature"

    @property
    def column(self) -> str:
        """Name of the recipes column holding this field"""
        return MIGRATION_COLUMNS[self]

    @property
    def label(self) -> str:
        return self.column.replace("_", " ")


MIGRATION_COLUMNS = {
    MigrationDomain.ORIGIN: "origin",
    MigrationDomain.PROCESSING_METHOD: "processing_method",
    MigrationDomain.GRINDER_MODEL: "grinder_model",
    # the grinder setting has always been stored in grinder_unit
    MigrationDomain.GRINDER_SETTING: "grinder_unit",
    MigrationDomain.FILTERING_TOOL: "filtering_tools",
    MigrationDomain.WATER_TEMPERATURE: "water_temperature",
}
