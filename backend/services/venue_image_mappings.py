"""
Static venue name -> storage folder table, per category.

Iteration order matters: fuzzy lookups accept the first entry that qualifies,
so keep more specific names ahead of the generic ones they contain.
"""
from typing import Dict, List

VenueMappings = Dict[str, Dict[str, str]]

VENUE_IMAGE_MAPPINGS: VenueMappings = {
    "shopping": {
        # Malls
        "Packages Mall": "Packages_Mall_Lahore_ChIJW57Oe1cdGTkRVnPOWapf8D8",
        "Dolmen Mall Lahore": "Dolmen_Mall_Lahore_Lahore_ChIJoX_4gMsJGTkRSJuRZSi0bLc",
        "Dolmen Mall - Clifton": "Dolmen_Mall_-_Clifton_Karachi_ChIJb1gSnAk9sz4R9zKPSWSPRo8",
        "Centaurus Mall": "Centaurus_Mall_Islamabad_ChIJeXP39LC_3zgRAm31UYYLxfg",
        "Centaurus Mall Garden": "Centaurus_Mall_Garden_Islamabad_ChIJQ6O0GpW_3zgR66sTqi8Q-2k",
        "Gulberg Galleria": "Gulberg_Galleria_Lahore_ChIJtRURlDQbGTkRQNFQ9aCui_g",
        "Giga Mall": "Giga_Mall_Lahore_ChIJW57Oe1cdGTkRVnPOWapf8D8",
        "LuckyOne Mall": "LuckyOne_Mall_Karachi_ChIJb1gSnAk9sz4R9zKPSWSPRo8",
        # Stores and markets
        "Carrefour - Packages Mall": "Carrefour_-_Packages_Mall_Lahore_ChIJsfKBA9UDGTkRpsbP5eoN1-8",
        "Al Fatah Exclusive Mall - Hussain Chowk": "Al_Fatah_Exclusive_Mall_Hussain_Chowk_ChIJW57Oe1cdGTkRVnPOWapf8D8",
        # Food courts and restaurants inside malls
        "Arcadian Café - Packages Mall": "Arcadian_CafÃ©_-_Packages_Mall_11169",
        "Broadway Pizza - Dolmen Mall Clifton": "Broadway_Pizza_-_Dolmen_Mall_Clifton_3950",
        "Broadway Pizza - Dolmen Mall Hyderi": "Broadway_Pizza_-_Dolmen_Mall_Hyderi_9928",
        "Broadway Pizza - LuckyOne Mall": "Broadway_Pizza_-_LuckyOne_Mall_3929",
        "Bundu Khan Restaurant - Packages Mall": "Bundu_Khan_Restaurant_-_Packages_Mall_8977",
        "California Pizza - The Centaurus Mall": "California_Pizza_-_The_Centaurus_Mall_7421",
        "Espresso Dolmen Mall Clifton": "Espresso_Dolmen_Mall_Clifton_3992",
        "Food Courts - Packages Mall": "Food_Courts_-_Packages_Mall_10980",
        "Fun City - The Centaurus Mall Islamabad": "Fun_City___The_Centaurus_Mall_Islamabad",
    },
    "restaurants": {
        "Bundu Khan Restaurant": "Bundu_Khan_Restaurant_8977",
        "California Pizza": "California_Pizza_7421",
        "Broadway Pizza": "Broadway_Pizza_3950",
        "Arcadian Café": "Arcadian_CafÃ©_11169",
        "Espresso": "Espresso_3992",
        # Chain branches inside malls
        "Bundu Khan Restaurant - Packages Mall": "Bundu_Khan_Restaurant_-_Packages_Mall_8977",
        "California Pizza - The Centaurus Mall": "California_Pizza_-_The_Centaurus_Mall_7421",
        "Broadway Pizza - Dolmen Mall Clifton": "Broadway_Pizza_-_Dolmen_Mall_Clifton_3950",
        "Broadway Pizza - Dolmen Mall Hyderi": "Broadway_Pizza_-_Dolmen_Mall_Hyderi_9928",
        "Broadway Pizza - LuckyOne Mall": "Broadway_Pizza_-_LuckyOne_Mall_3929",
        "Espresso Dolmen Mall Clifton": "Espresso_Dolmen_Mall_Clifton_3992",
    },
    "cafes": {
        "Arcadian Café": "Arcadian_CafÃ©_11169",
        "Espresso": "Espresso_3992",
        "Cafe Beirut": "Cafe_Beirut_Gulberg_ChIJnbNX5PcEGTkRMmXN3i-424c",
        "Artisan Coffee": "Artisan_Coffee_Gulberg_ChIJY7GsCz8FGTkRcU5c_M7I2Jc",
        "Arcadian Café - Packages Mall": "Arcadian_CafÃ©_-_Packages_Mall_11169",
        "Espresso Dolmen Mall Clifton": "Espresso_Dolmen_Mall_Clifton_3992",
        "Cafe Beirut Gulberg": "Cafe_Beirut_Gulberg_ChIJnbNX5PcEGTkRMmXN3i-424c",
        "Artisan Coffee Gulberg": "Artisan_Coffee_Gulberg_ChIJY7GsCz8FGTkRcU5c_M7I2Jc",
    },
    "entertainment": {
        "Fun City - The Centaurus Mall Islamabad": "Fun_City___The_Centaurus_Mall_Islamabad",
        "Food Courts - Packages Mall": "Food_Courts_-_Packages_Mall_10980",
        "Fun City": "Fun_City___The_Centaurus_Mall_Islamabad",
        "Food Courts": "Food_Courts_-_Packages_Mall_10980",
    },
    "arts-culture": {
        "Artisan Coffee": "Artisan_Coffee_Gulberg_ChIJY7GsCz8FGTkRcU5c_M7I2Jc",
        "Cafe Beirut": "Cafe_Beirut_Gulberg_ChIJnbNX5PcEGTkRMmXN3i-424c",
    },
    "health-wellness": {
        "Espresso": "Espresso_3992",
        "Artisan Coffee": "Artisan_Coffee_Gulberg_ChIJY7GsCz8FGTkRcU5c_M7I2Jc",
    },
    "sports-fitness": {
        "Fun City": "Fun_City___The_Centaurus_Mall_Islamabad",
        "Food Courts": "Food_Courts_-_Packages_Mall_10980",
    },
}


def available_venue_names(category: str, mappings: VenueMappings = VENUE_IMAGE_MAPPINGS) -> List[str]:
    return list(mappings.get(category, {}).keys())


def available_folders(category: str, mappings: VenueMappings = VENUE_IMAGE_MAPPINGS) -> List[str]:
    return list(mappings.get(category, {}).values())
