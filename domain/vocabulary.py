"""
Canonical value lists, alias tables and keyword lists for the recipe vocabulary.

Tables are read-only (MappingProxyType / tuples) and shared process-wide.
Alias tables map historical free-text spellings to canonical enum members;
keyword lists are checked by substring containment, in the order given.
"""

from types import MappingProxyType

from domain.enums import CoffeeOrigin, ProcessingMethod, GrinderModel, FilteringTool


# =============================================================================
# ORIGINS
# =============================================================================

ALL_COFFEE_ORIGINS = tuple(origin.value for origin in CoffeeOrigin)

ORIGIN_GROUPS = MappingProxyType(
    {
        "South America": (
            CoffeeOrigin.BRAZIL,
            CoffeeOrigin.COLOMBIA,
            CoffeeOrigin.PERU,
            CoffeeOrigin.ECUADOR,
        ),
        "Central America & Mexico": (
            CoffeeOrigin.GUATEMALA,
            CoffeeOrigin.MEXICO,
            CoffeeOrigin.HONDURAS,
            CoffeeOrigin.COSTA_RICA,
            CoffeeOrigin.NICARAGUA,
        ),
        "Africa": (
            CoffeeOrigin.ETHIOPIA,
            CoffeeOrigin.KENYA,
            CoffeeOrigin.RWANDA,
        ),
        "Asia & Oceania": (
            CoffeeOrigin.INDONESIA,
            CoffeeOrigin.VIETNAM,
            CoffeeOrigin.YEMEN,
        ),
    }
)

ORIGIN_ALIASES = MappingProxyType(
    {
        # Demonyms
        "Brazilian": CoffeeOrigin.BRAZIL,
        "Colombian": CoffeeOrigin.COLOMBIA,
        "Ethiopian": CoffeeOrigin.ETHIOPIA,
        "Guatemalan": CoffeeOrigin.GUATEMALA,
        "Kenyan": CoffeeOrigin.KENYA,
        "Honduran": CoffeeOrigin.HONDURAS,
        "Costa Rican": CoffeeOrigin.COSTA_RICA,
        "Nicaraguan": CoffeeOrigin.NICARAGUA,
        "Mexican": CoffeeOrigin.MEXICO,
        "Peruvian": CoffeeOrigin.PERU,
        "Ecuadoran": CoffeeOrigin.ECUADOR,
        "Ecuadorian": CoffeeOrigin.ECUADOR,
        "Indonesian": CoffeeOrigin.INDONESIA,
        "Vietnamese": CoffeeOrigin.VIETNAM,
        "Yemeni": CoffeeOrigin.YEMEN,
        "Rwandan": CoffeeOrigin.RWANDA,
        # Alternative spellings
        "Brasil": CoffeeOrigin.BRAZIL,
        "Kenia": CoffeeOrigin.KENYA,
        "Etiopia": CoffeeOrigin.ETHIOPIA,
        "Etiopía": CoffeeOrigin.ETHIOPIA,
        "México": CoffeeOrigin.MEXICO,
        "Perú": CoffeeOrigin.PERU,
        "Viet Nam": CoffeeOrigin.VIETNAM,
        "Việt Nam": CoffeeOrigin.VIETNAM,
    }
)


def continent_for_origin(origin: str) -> str:
    """Continent group label for a canonical origin, or 'Unknown'"""
    for continent, countries in ORIGIN_GROUPS.items():
        if origin in {country.value for country in countries}:
            return continent
    return "Unknown"


# =============================================================================
# PROCESSING METHODS
# =============================================================================

ALL_PROCESSING_METHODS = tuple(method.value for method in ProcessingMethod)

PROCESSING_METHOD_ALIASES = MappingProxyType(
    {
        "Wet Process": ProcessingMethod.WASHED,
        "Wet": ProcessingMethod.WASHED,
        "Fully Washed": ProcessingMethod.WASHED,
        "Washed Process": ProcessingMethod.WASHED,
        "Dry Process": ProcessingMethod.NATURAL,
        "Dry": ProcessingMethod.NATURAL,
        "Natural Process": ProcessingMethod.NATURAL,
        "Sun Dried": ProcessingMethod.NATURAL,
        "Sundried": ProcessingMethod.NATURAL,
        "Pulped Natural": ProcessingMethod.HONEY,
        "Honey Process": ProcessingMethod.HONEY,
        "Semi-Natural": ProcessingMethod.HONEY,
        "Demi-Sec": ProcessingMethod.HONEY,
        "Wet Hulled": ProcessingMethod.SEMI_WASHED,
        "Giling Basah": ProcessingMethod.SEMI_WASHED,
        "Indonesian": ProcessingMethod.SEMI_WASHED,
        "Anaerobic Fermentation": ProcessingMethod.ANAEROBIC,
        "Anaerobic Natural": ProcessingMethod.ANAEROBIC,
        "Anaerobic Washed": ProcessingMethod.ANAEROBIC,
        "Carbonic": ProcessingMethod.CARBONIC_MACERATION,
        "CM": ProcessingMethod.CARBONIC_MACERATION,
        "Wine Process": ProcessingMethod.CARBONIC_MACERATION,
        "Custom": ProcessingMethod.EXPERIMENTAL,
        "Special": ProcessingMethod.EXPERIMENTAL,
        "Innovative": ProcessingMethod.EXPERIMENTAL,
        "Other": ProcessingMethod.EXPERIMENTAL,
    }
)

# Order matters: compound processes ("anaerobic natural", "semi-washed")
# must be tested before the plain methods they contain.
PROCESSING_METHOD_KEYWORDS = (
    (ProcessingMethod.ANAEROBIC, ("anaerobic", "anaerobe", "oxygen-free", "sealed tank")),
    (ProcessingMethod.CARBONIC_MACERATION, ("carbonic", "maceration", "co2")),
    (ProcessingMethod.SEMI_WASHED, ("semi-washed", "semi washed", "wet hull", "wet-hull", "giling")),
    (ProcessingMethod.HONEY, ("honey", "pulped", "miel", "black honey", "red honey", "yellow honey")),
    (ProcessingMethod.EXPERIMENTAL, ("experimental", "infused", "koji", "yeast", "thermal shock", "double fermentation")),
    (ProcessingMethod.WASHED, ("washed", "wet", "lavado", "kenya process")),
    (ProcessingMethod.NATURAL, ("natural", "dry", "sun-dried", "sun dried", "raised bed", "unwashed")),
)


# =============================================================================
# GRINDER MODELS
# =============================================================================

ALL_GRINDER_MODELS = tuple(model.value for model in GrinderModel)

# Keys are lower-case; lookups fold the raw value before matching.
GRINDER_MODEL_ALIASES = MappingProxyType(
    {
        # Baratza
        "baratza encore": GrinderModel.BARATZA_ENCORE,
        "encore": GrinderModel.BARATZA_ENCORE,
        "baratza virtuoso+": GrinderModel.BARATZA_VIRTUOSO_PLUS,
        "baratza virtuoso plus": GrinderModel.BARATZA_VIRTUOSO_PLUS,
        "virtuoso+": GrinderModel.BARATZA_VIRTUOSO_PLUS,
        "virtuoso plus": GrinderModel.BARATZA_VIRTUOSO_PLUS,
        "baratza vario": GrinderModel.BARATZA_VARIO,
        "vario": GrinderModel.BARATZA_VARIO,
        # Comandante
        "comandante c40": GrinderModel.COMANDANTE_C40,
        "comandante": GrinderModel.COMANDANTE_C40,
        "c40": GrinderModel.COMANDANTE_C40,
        # Timemore
        "timemore c2": GrinderModel.TIMEMORE_C2,
        "timemore c3": GrinderModel.TIMEMORE_C3,
        "c2": GrinderModel.TIMEMORE_C2,
        "c3": GrinderModel.TIMEMORE_C3,
        # 1Zpresso
        "1zpresso jx-pro": GrinderModel.ONEZPRESSO_JX_PRO,
        "1zpresso jx pro": GrinderModel.ONEZPRESSO_JX_PRO,
        "jx-pro": GrinderModel.ONEZPRESSO_JX_PRO,
        "jx pro": GrinderModel.ONEZPRESSO_JX_PRO,
        # Hario
        "hario mini mill": GrinderModel.HARIO_MINI_MILL,
        "hario mini-mill": GrinderModel.HARIO_MINI_MILL,
        "mini mill": GrinderModel.HARIO_MINI_MILL,
        "hario": GrinderModel.HARIO_MINI_MILL,
        # Porlex
        "porlex mini": GrinderModel.PORLEX_MINI,
        "porlex": GrinderModel.PORLEX_MINI,
        # Knock
        "knock feldgrind": GrinderModel.KNOCK_FELDGRIND,
        "feldgrind": GrinderModel.KNOCK_FELDGRIND,
        "knock": GrinderModel.KNOCK_FELDGRIND,
        # Custom grinder marker
        "others": GrinderModel.OTHERS,
    }
)


# =============================================================================
# GRINDER SETTINGS
# =============================================================================

MIN_GRINDER_SETTING = 1
MAX_GRINDER_SETTING = 40
DEFAULT_GRINDER_SETTING = "20"

ALL_GRINDER_SETTINGS = tuple(
    str(setting) for setting in range(MIN_GRINDER_SETTING, MAX_GRINDER_SETTING + 1)
)

GRINDER_SETTING_ALIASES = MappingProxyType(
    {
        # Extra fine (espresso, turkish)
        "extra fine": "2",
        "very fine": "3",
        "turkish": "1",
        "espresso": "4",
        # Fine (espresso, moka pot)
        "fine": "6",
        "fine grind": "6",
        "moka pot": "7",
        "aeropress fine": "8",
        # Medium-fine (pour over, drip)
        "medium-fine": "12",
        "medium fine": "12",
        "pour over": "13",
        "v60": "14",
        "chemex fine": "11",
        "drip": "15",
        # Medium
        "medium": "20",
        "medium grind": "20",
        "auto drip": "22",
        "cone filter": "18",
        "flat filter": "25",
        # Medium-coarse
        "medium-coarse": "28",
        "medium coarse": "28",
        "chemex": "30",
        "clever dripper": "26",
        # Coarse (french press, cold brew)
        "coarse": "33",
        "coarse grind": "33",
        "french press": "35",
        "press pot": "35",
        "cold brew": "37",
        # Extra coarse
        "extra coarse": "38",
        "very coarse": "39",
        "cowboy coffee": "40",
        "percolator": "36",
    }
)


# =============================================================================
# FILTERING TOOLS
# =============================================================================

ALL_FILTERING_TOOLS = tuple(tool.value for tool in FilteringTool)

FILTERING_TOOL_KEYWORDS = (
    (
        FilteringTool.PAPER,
        (
            "paper", "filter", "v60", "hario", "chemex", "kalita", "melitta",
            "pour over", "pour-over", "dripper", "cone filter", "flat filter",
            "bonded", "white filter", "brown filter", "natural filter",
            "bleached", "unbleached", "disposable",
        ),
    ),
    (
        FilteringTool.METAL,
        (
            "metal", "steel", "mesh", "french press", "press pot", "plunger",
            "aeropress metal", "permanent", "reusable", "stainless", "gold",
            "titanium", "portafilter", "basket", "espresso", "perforated",
            "screen", "sieve",
        ),
    ),
    (
        FilteringTool.CLOTH,
        (
            "cloth", "fabric", "sock", "nel", "flannel", "cotton", "linen",
            "textile", "drip sock", "coffee sock", "traditional",
        ),
    ),
)


# =============================================================================
# WATER TEMPERATURE
# =============================================================================

MIN_WATER_TEMPERATURE = 80
MAX_WATER_TEMPERATURE = 100

# Boiling water reported slightly over 100 is treated as 100
BOILING_RANGE_MAX = 105
# Readings a few degrees under the range are treated as 80
NEAR_RANGE_MIN = 75
# At or below this the recipe is a cold/room-temperature brew
COLD_BREW_MAX = 30
# Beyond this the reading is not a plausible brewing temperature
IMPLAUSIBLE_TEMPERATURE = 120

ALL_WATER_TEMPERATURES = tuple(range(MAX_WATER_TEMPERATURE, MIN_WATER_TEMPERATURE - 1, -1))
