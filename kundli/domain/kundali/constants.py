from typing import Dict, FrozenSet, List, Tuple


# ─────────────────────────────────────────────
# Zodiac
# ─────────────────────────────────────────────

SIGNS = [
    "Aries", "Taurus", "Gemini", "Cancer",
    "Leo", "Virgo", "Libra", "Scorpio",
    "Sagittarius", "Capricorn", "Aquarius", "Pisces",
]

SIGN_SPAN = 30.0

# Sign index → ruling planet (Scorpio and Aquarius use their classical lords)
SIGN_LORDS = [
    "Mars", "Venus", "Mercury", "Moon",
    "Sun", "Mercury", "Venus", "Mars",
    "Jupiter", "Saturn", "Saturn", "Jupiter",
]

ELEMENTS = ["fire", "earth", "air", "water"]          # sign_index % 4
MODALITIES = ["movable", "fixed", "dual"]             # sign_index % 3


def is_odd_sign(sign_index: int) -> bool:
    # Aries (index 0) is the first, odd sign
    return sign_index % 2 == 0


def element_of(sign_index: int) -> str:
    return ELEMENTS[sign_index % 4]


def modality_of(sign_index: int) -> str:
    return MODALITIES[sign_index % 3]


# ─────────────────────────────────────────────
# Bodies
# ─────────────────────────────────────────────

PLANETS = ["Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn"]
NODES = ["Rahu", "Ketu"]
BODIES = PLANETS + NODES

LUMINARIES: FrozenSet[str] = frozenset({"Sun", "Moon"})

NATURAL_BENEFICS: FrozenSet[str] = frozenset({"Jupiter", "Venus", "Mercury", "Moon"})
NATURAL_MALEFICS: FrozenSet[str] = frozenset({"Sun", "Mars", "Saturn", "Rahu", "Ketu"})


# ─────────────────────────────────────────────
# Dignity tables
# ─────────────────────────────────────────────

# body → (sign_index, exact degree of deep exaltation)
EXALTATION: Dict[str, Tuple[int, float]] = {
    "Sun": (0, 10.0),
    "Moon": (1, 3.0),
    "Mars": (9, 28.0),
    "Mercury": (5, 15.0),
    "Jupiter": (3, 5.0),
    "Venus": (11, 27.0),
    "Saturn": (6, 20.0),
    "Rahu": (1, 20.0),
    "Ketu": (7, 20.0),
}

DEBILITATION: Dict[str, int] = {
    "Sun": 6,
    "Moon": 7,
    "Mars": 3,
    "Mercury": 11,
    "Jupiter": 9,
    "Venus": 5,
    "Saturn": 0,
    "Rahu": 7,
    "Ketu": 1,
}

OWN_SIGNS: Dict[str, FrozenSet[int]] = {
    "Sun": frozenset({4}),
    "Moon": frozenset({3}),
    "Mars": frozenset({0, 7}),
    "Mercury": frozenset({2, 5}),
    "Jupiter": frozenset({8, 11}),
    "Venus": frozenset({1, 6}),
    "Saturn": frozenset({9, 10}),
    "Rahu": frozenset({10}),
    "Ketu": frozenset({7}),
}


# ─────────────────────────────────────────────
# Nakshatras
# ─────────────────────────────────────────────

NAKSHATRAS = [
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira",
    "Ardra", "Punarvasu", "Pushya", "Ashlesha",
    "Magha", "Purva Phalguni", "Uttara Phalguni", "Hasta",
    "Chitra", "Swati", "Vishakha", "Anuradha", "Jyeshtha",
    "Mula", "Purva Ashadha", "Uttara Ashadha", "Shravana",
    "Dhanishta", "Shatabhisha", "Purva Bhadrapada",
    "Uttara Bhadrapada", "Revati",
]

NAKSHATRA_SPAN = 360.0 / 27.0   # 13°20'
PADA_SPAN = 360.0 / 108.0       # 3°20'

GANA = [
    "Deva", "Manushya", "Rakshasa", "Manushya", "Deva", "Manushya",
    "Deva", "Deva", "Rakshasa", "Rakshasa", "Manushya",
    "Manushya", "Deva", "Rakshasa", "Deva", "Rakshasa",
    "Deva", "Rakshasa", "Rakshasa", "Manushya", "Manushya",
    "Deva", "Rakshasa", "Rakshasa", "Manushya",
    "Manushya", "Deva",
]

NADI = [
    "Adi", "Madhya", "Antya", "Antya", "Madhya", "Adi",
    "Adi", "Madhya", "Antya", "Antya", "Madhya",
    "Adi", "Adi", "Madhya", "Antya", "Antya",
    "Madhya", "Adi", "Adi", "Madhya", "Antya",
    "Antya", "Madhya", "Adi", "Adi",
    "Madhya", "Antya",
]


# ─────────────────────────────────────────────
# Houses
# ─────────────────────────────────────────────

HOUSE_NAMES = [
    "Lagna", "Dhana", "Sahaja", "Sukha", "Putra", "Ripu",
    "Kalatra", "Ayu", "Dharma", "Karma", "Labha", "Vyaya",
]

KENDRA_HOUSES: FrozenSet[int] = frozenset({1, 4, 7, 10})
TRIKONA_HOUSES: FrozenSet[int] = frozenset({1, 5, 9})
DUSTHANA_HOUSES: FrozenSet[int] = frozenset({6, 8, 12})
UPACHAYA_HOUSES: FrozenSet[int] = frozenset({3, 6, 10, 11})
MARAKA_HOUSES: FrozenSet[int] = frozenset({2, 7})

HOUSE_CATEGORIES: Dict[str, FrozenSet[int]] = {
    "kendra": KENDRA_HOUSES,
    "trikona": TRIKONA_HOUSES,
    "dusthana": DUSTHANA_HOUSES,
    "upachaya": UPACHAYA_HOUSES,
    "maraka": MARAKA_HOUSES,
}


def house_categories(house: int) -> List[str]:
    return [name for name, houses in HOUSE_CATEGORIES.items() if house in houses]
