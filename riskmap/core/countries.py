# riskmap/core/countries.py
"""
Static lookup tables for SafeAirspace advisory keys.

The feed names countries three different ways: the embedded literal token
("SaudiArabia"), the listing label ("Saudi Arabia") and, in the boundary
dataset, an ISO3 code. Everything here is read-only after import.
"""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


# Name (spaced or feed-token spelling) → ISO 3166-1 alpha-3
_NAME_TO_ISO3: dict[str, str] = {
    "Afghanistan": "AFG", "Albania": "ALB", "Algeria": "DZA", "Angola": "AGO", "Argentina": "ARG",
    "Armenia": "ARM", "Australia": "AUS", "Austria": "AUT", "Azerbaijan": "AZE",
    "Bahamas": "BHS", "Bahrain": "BHR", "Bangladesh": "BGD", "Barbados": "BRB", "Belarus": "BLR",
    "Belgium": "BEL", "Belize": "BLZ", "Benin": "BEN", "Bhutan": "BTN", "Bolivia": "BOL",
    "Bosnia and Herzegovina": "BIH", "BosniaandHerzegovina": "BIH", "Botswana": "BWA", "Brazil": "BRA",
    "Brunei": "BRN", "Bulgaria": "BGR", "Burkina Faso": "BFA", "BurkinaFaso": "BFA", "Burundi": "BDI",
    "Cambodia": "KHM", "Cameroon": "CMR", "Canada": "CAN", "Cape Verde": "CPV",
    "Central African Republic": "CAF", "CentralAfricanRepublic": "CAF", "Chad": "TCD", "Chile": "CHL",
    "China": "CHN", "Colombia": "COL", "Congo DRC": "COD", "CongoDRC": "COD",
    "Costa Rica": "CRI", "CostaRica": "CRI",
    "Croatia": "HRV", "Cuba": "CUB", "Curacao": "CUW", "Cyprus": "CYP",
    "Czech Republic": "CZE", "CzechRepublic": "CZE",
    "Denmark": "DNK", "Djibouti": "DJI", "Dominican Republic": "DOM", "DominicanRepublic": "DOM",
    "Ecuador": "ECU", "Egypt": "EGY", "El Salvador": "SLV", "ElSalvador": "SLV",
    "Equatorial Guinea": "GNQ", "EquatorialGuinea": "GNQ", "Eritrea": "ERI", "Estonia": "EST",
    "Ethiopia": "ETH", "Fiji": "FJI",
    "Finland": "FIN", "France": "FRA", "Gabon": "GAB", "Gambia": "GMB",
    "Georgia": "GEO", "Germany": "DEU", "Ghana": "GHA", "Greece": "GRC", "Greenland": "GRL",
    "Guatemala": "GTM", "Guinea": "GIN", "Guinea-Bissau": "GNB", "Guyana": "GUY",
    "Haiti": "HTI", "Honduras": "HND", "Hungary": "HUN", "Iceland": "ISL", "India": "IND",
    "Indonesia": "IDN", "Iran": "IRN", "Iraq": "IRQ", "Ireland": "IRL", "Israel": "ISR",
    "Italy": "ITA", "Ivory Coast": "CIV", "IvoryCoast": "CIV", "Jamaica": "JAM", "Japan": "JPN",
    "Jordan": "JOR",
    "Kazakhstan": "KAZ", "Kenya": "KEN", "Kuwait": "KWT", "Kyrgyzstan": "KGZ", "Laos": "LAO",
    "Latvia": "LVA", "Lebanon": "LBN", "Lesotho": "LSO", "Liberia": "LBR", "Libya": "LBY",
    "Lithuania": "LTU", "Luxembourg": "LUX", "Macedonia": "MKD", "Madagascar": "MDG", "Malawi": "MWI",
    "Malaysia": "MYS", "Maldives": "MDV", "Mali": "MLI", "Malta": "MLT", "Mauritania": "MRT",
    "Mauritius": "MUS", "Mexico": "MEX", "Moldova": "MDA", "Mongolia": "MNG", "Montenegro": "MNE",
    "Morocco": "MAR", "Mozambique": "MOZ", "Myanmar": "MMR", "Namibia": "NAM", "Nepal": "NPL",
    "Netherlands": "NLD", "New Zealand": "NZL", "NewZealand": "NZL", "Nicaragua": "NIC",
    "Niger": "NER", "Nigeria": "NGA",
    "North Korea": "PRK", "NorthKorea": "PRK", "Norway": "NOR", "Oman": "OMN", "Pakistan": "PAK",
    "Palestine": "PSE", "Panama": "PAN", "Papua New Guinea": "PNG", "PapuaNewGuinea": "PNG",
    "Paraguay": "PRY", "Peru": "PER", "Philippines": "PHL",
    "Poland": "POL", "Portugal": "PRT", "Puerto Rico": "PRI", "PuertoRico": "PRI", "Qatar": "QAT",
    "Republic of the Congo": "COG", "Romania": "ROU", "Russia": "RUS", "Rwanda": "RWA",
    "Saudi Arabia": "SAU", "SaudiArabia": "SAU", "Senegal": "SEN",
    "Serbia": "SRB", "Sierra Leone": "SLE", "SierraLeone": "SLE", "Singapore": "SGP", "Slovakia": "SVK",
    "Slovenia": "SVN", "Solomon Islands": "SLB", "Somalia": "SOM", "South Africa": "ZAF",
    "SouthAfrica": "ZAF", "South Korea": "KOR", "SouthKorea": "KOR",
    "South Sudan": "SSD", "SouthSudan": "SSD", "Spain": "ESP", "Sri Lanka": "LKA", "SriLanka": "LKA",
    "Sudan": "SDN", "Suriname": "SUR", "Swaziland": "SWZ", "Sweden": "SWE", "Switzerland": "CHE",
    "Syria": "SYR",
    "Taiwan": "TWN", "Tajikistan": "TJK", "Tanzania": "TZA", "Thailand": "THA", "Togo": "TGO",
    "Tonga": "TON", "Trinidad and Tobago": "TTO", "TrinidadandTobago": "TTO", "Tunisia": "TUN",
    "Turkey": "TUR", "Turkmenistan": "TKM",
    "Uganda": "UGA", "Ukraine": "UKR", "United Arab Emirates": "ARE", "UnitedArabEmirates": "ARE",
    "United Kingdom": "GBR", "UnitedKingdom": "GBR", "United States": "USA", "UnitedStates": "USA",
    "Uruguay": "URY",
    "Uzbekistan": "UZB", "Vanuatu": "VUT", "Venezuela": "VEN", "Vietnam": "VNM",
    "Western Sahara": "ESH", "WesternSahara": "ESH", "Samoa": "WSM", "Yemen": "YEM",
    "Zambia": "ZMB", "Zimbabwe": "ZWE",
    "Aruba": "ABW", "Bonaire": "BES",
}


def _region(*codes: str) -> Tuple[str, ...]:
    return tuple(codes)


_CENTRAL_AMERICA = _region("GTM", "BLZ", "HND", "SLV", "NIC", "CRI", "PAN")
_SOUTH_AMERICA = _region("BRA", "ARG", "COL", "PER", "VEN", "CHL", "ECU", "BOL", "PRY", "URY", "GUY", "SUR")
_WEST_AFRICA = _region(
    "NGA", "GHA", "CIV", "SEN", "MLI", "BFA", "NER", "GIN", "BEN", "TGO", "SLE", "LBR", "GMB", "GNB", "MRT",
)
_EAST_AFRICA = _region("KEN", "TZA", "UGA", "ETH", "RWA", "BDI", "SSD", "SOM", "ERI", "DJI")
_HORN_OF_AFRICA = _region("ETH", "SOM", "ERI", "DJI")
_NORTH_AFRICA = _region("MAR", "DZA", "TUN", "LBY", "EGY")
_SOUTHERN_AFRICA = _region("ZAF", "NAM", "BWA", "ZWE", "MOZ", "ZMB", "MWI", "LSO", "SWZ")
_CENTRAL_AFRICA = _region("COD", "CAF", "CMR", "GAB", "COG", "GNQ", "TCD")
_MIDDLE_EAST = _region("SAU", "ARE", "QAT", "KWT", "BHR", "OMN", "YEM", "IRQ", "SYR", "JOR", "LBN", "ISR", "PSE")
_GULF_STATES = _region("SAU", "ARE", "QAT", "KWT", "BHR", "OMN")
_PERSIAN_GULF = _region("SAU", "ARE", "QAT", "KWT", "BHR", "OMN", "IRN", "IRQ")
_BALTICS = _region("EST", "LVA", "LTU")
_EASTERN_EUROPE = _region("UKR", "BLR", "MDA", "POL", "CZE", "SVK", "HUN", "ROU", "BGR")
_NORDIC = _region("NOR", "SWE", "DNK", "FIN", "ISL")
_SOUTHEAST_ASIA = _region("THA", "VNM", "MMR", "KHM", "LAO", "MYS", "SGP", "IDN", "PHL", "BRN")
_SOUTH_ASIA = _region("IND", "PAK", "BGD", "LKA", "NPL", "BTN", "MDV")
_CENTRAL_ASIA = _region("KAZ", "UZB", "TKM", "TJK", "KGZ", "AFG")
_EAST_ASIA = _region("CHN", "JPN", "KOR", "PRK", "MNG", "TWN")
_OCEANIA = _region("AUS", "NZL", "PNG", "FJI", "VUT")

# Multi-country advisories rendered as one combined MultiPolygon.
# Both the feed token and the spaced listing label are registered.
_REGION_COUNTRIES: dict[str, Tuple[str, ...]] = {
    # Americas
    "CentralAmerica": _CENTRAL_AMERICA,
    "Central America": _CENTRAL_AMERICA,
    "Caribbean": _region("CUB", "JAM", "HTI", "DOM", "PRI", "BHS", "TTO", "BRB"),
    "SouthAmerica": _SOUTH_AMERICA,
    "South America": _SOUTH_AMERICA,
    # Africa
    "WestAfrica": _WEST_AFRICA,
    "West Africa": _WEST_AFRICA,
    "EastAfrica": _EAST_AFRICA,
    "East Africa": _EAST_AFRICA,
    "HornofAfrica": _HORN_OF_AFRICA,
    "Horn of Africa": _HORN_OF_AFRICA,
    "Sahel": _region("MLI", "NER", "TCD", "BFA", "MRT", "SEN", "SDN"),
    "NorthAfrica": _NORTH_AFRICA,
    "North Africa": _NORTH_AFRICA,
    "SouthernAfrica": _SOUTHERN_AFRICA,
    "Southern Africa": _SOUTHERN_AFRICA,
    "CentralAfrica": _CENTRAL_AFRICA,
    "Central Africa": _CENTRAL_AFRICA,
    # Middle East
    "MiddleEast": _MIDDLE_EAST,
    "Middle East": _MIDDLE_EAST,
    "GulfStates": _GULF_STATES,
    "Gulf States": _GULF_STATES,
    "Levant": _region("SYR", "LBN", "JOR", "ISR", "PSE"),
    "PersianGulf": _PERSIAN_GULF,
    "Persian Gulf": _PERSIAN_GULF,
    # Europe
    "Balkans": _region("SRB", "HRV", "BIH", "MNE", "MKD", "ALB", "SVN", "BGR", "ROU"),
    "BalticStates": _BALTICS,
    "Baltic States": _BALTICS,
    "Baltics": _BALTICS,
    "Caucasus": _region("GEO", "ARM", "AZE"),
    "EasternEurope": _EASTERN_EUROPE,
    "Eastern Europe": _EASTERN_EUROPE,
    "Scandinavia": _NORDIC,
    "Nordic": _NORDIC,
    # Asia
    "SoutheastAsia": _SOUTHEAST_ASIA,
    "Southeast Asia": _SOUTHEAST_ASIA,
    "SouthAsia": _SOUTH_ASIA,
    "South Asia": _SOUTH_ASIA,
    "CentralAsia": _CENTRAL_ASIA,
    "Central Asia": _CENTRAL_ASIA,
    "EastAsia": _EAST_ASIA,
    "East Asia": _EAST_ASIA,
    # Oceania
    "Oceania": _OCEANIA,
    "Pacific": _OCEANIA,
    "Melanesia": _region("PNG", "FJI", "VUT", "SLB"),
    "Polynesia": _region("NZL", "WSM", "TON"),
}

# Feed tokens that never get a listing label
_DISPLAY_NAME_OVERRIDES: dict[str, str] = {
    "UnitedArabEmirates": "United Arab Emirates",
    "CentralAfricanRepublic": "Central African Republic",
    "SaudiArabia": "Saudi Arabia",
    "SouthKorea": "South Korea",
    "NorthKorea": "North Korea",
    "SouthSudan": "South Sudan",
    "WesternSahara": "Western Sahara",
    "PuertoRico": "Puerto Rico",
    "CongoDRC": "Congo DRC",
    "SriLanka": "Sri Lanka",
    "NewZealand": "New Zealand",
    "BurkinaFaso": "Burkina Faso",
    "SierraLeone": "Sierra Leone",
    "IvoryCoast": "Ivory Coast",
    "EquatorialGuinea": "Equatorial Guinea",
    "BosniaandHerzegovina": "Bosnia and Herzegovina",
    "TrinidadandTobago": "Trinidad and Tobago",
    "ElSalvador": "El Salvador",
    "CostaRica": "Costa Rica",
    "DominicanRepublic": "Dominican Republic",
    "CzechRepublic": "Czech Republic",
    "UnitedKingdom": "United Kingdom",
    "UnitedStates": "United States",
    "CentralAmerica": "Central America",
}

# Detail-page slugs that the lower-case/hyphen rule gets wrong for feed tokens.
# Spaced labels already slug correctly, so only unspaced spellings are listed.
_SLUG_OVERRIDES: dict[str, str] = {
    "CentralAfricanRepublic": "central-african-republic",
    "UnitedArabEmirates": "united-arab-emirates",
    "CongoDRC": "congo-drc",
    "NorthKorea": "north-korea",
    "SouthKorea": "south-korea",
    "SouthSudan": "south-sudan",
    "SaudiArabia": "saudi-arabia",
    "WesternSahara": "western-sahara",
    "PuertoRico": "puerto-rico",
    "CentralAmerica": "central-america",
    "SriLanka": "sri-lanka",
    "NewZealand": "new-zealand",
    "PapuaNewGuinea": "papua-new-guinea",
    "BurkinaFaso": "burkina-faso",
    "SierraLeone": "sierra-leone",
    "IvoryCoast": "ivory-coast",
    "EquatorialGuinea": "equatorial-guinea",
    "TrinidadandTobago": "trinidad-and-tobago",
    "BosniaandHerzegovina": "bosnia-and-herzegovina",
    "ElSalvador": "el-salvador",
    "CostaRica": "costa-rica",
    "DominicanRepublic": "dominican-republic",
    "CzechRepublic": "czech-republic",
    "UnitedKingdom": "united-kingdom",
    "UnitedStates": "united-states",
}

NAME_TO_ISO3: Mapping[str, str] = MappingProxyType(_NAME_TO_ISO3)
REGION_COUNTRIES: Mapping[str, Tuple[str, ...]] = MappingProxyType(_REGION_COUNTRIES)
DISPLAY_NAME_OVERRIDES: Mapping[str, str] = MappingProxyType(_DISPLAY_NAME_OVERRIDES)
SLUG_OVERRIDES: Mapping[str, str] = MappingProxyType(_SLUG_OVERRIDES)


# ──────────────────────────────────────────────────────────────
# Risk levels
# ──────────────────────────────────────────────────────────────

RISK_LEVELS: Tuple[int, ...] = (1, 2, 3, 4)

RISK_LABELS: Mapping[int, str] = MappingProxyType({
    1: "Do Not Fly",
    2: "High Risk",
    3: "Caution",
    4: "Monitor",
})

# KML colours are AABBGGRR
RISK_COLORS: Mapping[int, Mapping[str, str]] = MappingProxyType({
    1: MappingProxyType({"fill": "990000ff", "outline": "ff0000ff"}),   # red
    2: MappingProxyType({"fill": "990080ff", "outline": "ff0080ff"}),   # orange
    3: MappingProxyType({"fill": "9900ffff", "outline": "ff00ffff"}),   # yellow
    4: MappingProxyType({"fill": "00000000", "outline": "ff00ff00"}),   # green outline only
})

RISK_LINE_WIDTHS: Mapping[int, int] = MappingProxyType({1: 2, 2: 2, 3: 2, 4: 1})

# Heading colour used inside placemark balloons (CSS)
RISK_HEADING_COLORS: Mapping[int, str] = MappingProxyType({1: "#ff0000", 2: "#ff8000"})
DEFAULT_HEADING_COLOR = "#ffff00"


# ──────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────

def display_name_for(key: str, listing_name: Optional[str] = None) -> str:
    """Listing label, else a known spelling for the feed token, else the token."""
    return listing_name or DISPLAY_NAME_OVERRIDES.get(key) or key


def country_slug(name: str) -> str:
    """
    Detail-page slug for a country name.

    >>> country_slug("Saudi Arabia")
    'saudi-arabia'
    >>> country_slug("SaudiArabia")
    'saudi-arabia'
    """
    override = SLUG_OVERRIDES.get(name)
    if override:
        return override
    return re.sub(r"\s+", "-", name.lower())


def region_members(key: str, display_name: str) -> Optional[Tuple[str, ...]]:
    return REGION_COUNTRIES.get(key) or REGION_COUNTRIES.get(display_name)


def iso3_for(key: str, display_name: str) -> Optional[str]:
    return NAME_TO_ISO3.get(key) or NAME_TO_ISO3.get(display_name)
