"""
Static world-cities reference table and the city exposure resolver.

The table is built once at import and never mutated; every lookup
recomputes distances from scratch.
"""

import logging

from geo import haversine_distance
from models import AffectedCity, City

logger = logging.getLogger(__name__)

# Major world cities (name, country, lat, lng, population)
WORLD_CITIES = (
    City("New York", "USA", 40.7128, -74.0060, 8336817),
    City("Los Angeles", "USA", 34.0522, -118.2437, 3979576),
    City("Chicago", "USA", 41.8781, -87.6298, 2693976),
    City("Houston", "USA", 29.7604, -95.3698, 2320268),
    City("Philadelphia", "USA", 39.9526, -75.1652, 1584064),
    City("Phoenix", "USA", 33.4484, -112.0740, 1608139),
    City("San Antonio", "USA", 29.4241, -98.4936, 1547253),
    City("San Diego", "USA", 32.7157, -117.1611, 1423851),
    City("Dallas", "USA", 32.7767, -96.7970, 1343573),
    City("San Jose", "USA", 37.3382, -121.8863, 1021795),
    City("Toronto", "Canada", 43.6532, -79.3832, 2731571),
    City("Montreal", "Canada", 45.5017, -73.5673, 1704694),
    City("Vancouver", "Canada", 49.2827, -123.1207, 631486),
    City("Mexico City", "Mexico", 19.4326, -99.1332, 9209944),
    City("São Paulo", "Brazil", -23.5505, -46.6333, 12325232),
    City("Rio de Janeiro", "Brazil", -22.9068, -43.1729, 6748000),
    City("Buenos Aires", "Argentina", -34.6118, -58.3960, 2890151),
    City("Lima", "Peru", -12.0464, -77.0428, 9751717),
    City("Bogotá", "Colombia", 4.7110, -74.0721, 7412566),
    City("Santiago", "Chile", -33.4489, -70.6693, 5614000),
    City("London", "UK", 51.5074, -0.1278, 9304016),
    City("Paris", "France", 48.8566, 2.3522, 2161000),
    City("Berlin", "Germany", 52.5200, 13.4050, 3669491),
    City("Madrid", "Spain", 40.4168, -3.7038, 3223334),
    City("Rome", "Italy", 41.9028, 12.4964, 2873494),
    City("Amsterdam", "Netherlands", 52.3676, 4.9041, 821752),
    City("Barcelona", "Spain", 41.3851, 2.1734, 1620343),
    City("Vienna", "Austria", 48.2082, 16.3738, 1897491),
    City("Stockholm", "Sweden", 59.3293, 18.0686, 975551),
    City("Oslo", "Norway", 59.9139, 10.7522, 697549),
    City("Copenhagen", "Denmark", 55.6761, 12.5683, 644431),
    City("Warsaw", "Poland", 52.2297, 21.0122, 1790658),
    City("Prague", "Czech Republic", 50.0755, 14.4378, 1318982),
    City("Budapest", "Hungary", 47.4979, 19.0402, 1752286),
    City("Moscow", "Russia", 55.7558, 37.6176, 12615279),
    City("St. Petersburg", "Russia", 59.9311, 30.3609, 5398064),
    City("Tokyo", "Japan", 35.6762, 139.6503, 37435191),
    City("Delhi", "India", 28.7041, 77.1025, 32941308),
    City("Shanghai", "China", 31.2304, 121.4737, 28516904),
    City("Dhaka", "Bangladesh", 23.8103, 90.4125, 22478116),
    City("São Paulo Metro", "Brazil", -23.5505, -46.6333, 22429800),
    City("Cairo", "Egypt", 30.0444, 31.2357, 21750020),
    City("Mexico City Metro", "Mexico", 19.4326, -99.1332, 21804515),
    City("Beijing", "China", 39.9042, 116.4074, 21766214),
    City("Mumbai", "India", 19.0760, 72.8777, 20667656),
    City("Osaka", "Japan", 34.6937, 135.5023, 18967459),
    City("Karachi", "Pakistan", 24.8607, 67.0011, 16459472),
    City("Chongqing", "China", 29.4316, 106.9123, 16382376),
    City("Istanbul", "Turkey", 41.0082, 28.9784, 15636243),
    City("Buenos Aires Metro", "Argentina", -34.6118, -58.3960, 15624000),
    City("Kolkata", "India", 22.5726, 88.3639, 14974073),
    City("Manila", "Philippines", 14.5995, 120.9842, 14808137),
    City("Lagos", "Nigeria", 6.5244, 3.3792, 14368332),
    City("Rio de Janeiro Metro", "Brazil", -22.9068, -43.1729, 13634274),
    City("Tianjin", "China", 39.3434, 117.3616, 13589078),
    City("Kinshasa", "DR Congo", -4.4419, 15.2663, 12691000),
    City("Guangzhou", "China", 23.1291, 113.2644, 12458130),
    City("Lahore", "Pakistan", 31.5204, 74.3587, 12642423),
    City("Bangalore", "India", 12.9716, 77.5946, 12326532),
    City("Shenzhen", "China", 22.5431, 114.0579, 12084391),
    City("Seoul", "South Korea", 37.5665, 126.9780, 9776000),
    City("Jakarta", "Indonesia", -6.2088, 106.8456, 10562088),
    City("Chennai", "India", 13.0827, 80.2707, 10971108),
    City("Lima Metro", "Peru", -12.0464, -77.0428, 10719188),
    City("Bogotá Metro", "Colombia", 4.7110, -74.0721, 10779000),
    City("Ho Chi Minh City", "Vietnam", 10.8231, 106.6297, 9077158),
    City("Hyderabad", "India", 17.3850, 78.4867, 10004144),
    City("Wuhan", "China", 30.5928, 114.3055, 8364977),
    City("Kuala Lumpur", "Malaysia", 3.1390, 101.6869, 1808259),
    City("Singapore", "Singapore", 1.3521, 103.8198, 5453566),
    City("Bangkok", "Thailand", 13.7563, 100.5018, 10539415),
    City("Taipei", "Taiwan", 25.0330, 121.5654, 2704810),
    City("Hong Kong", "China", 22.3193, 114.1694, 7428887),
    City("Tehran", "Iran", 35.6892, 51.3890, 8693706),
    City("Dubai", "UAE", 25.2048, 55.2708, 3331420),
    City("Riyadh", "Saudi Arabia", 24.7136, 46.6753, 7009639),
    City("Baghdad", "Iraq", 33.3152, 44.3661, 7216000),
    City("Johannesburg", "South Africa", -26.2041, 28.0473, 4803262),
    City("Cape Town", "South Africa", -33.9249, 18.4241, 4617560),
    City("Alexandria", "Egypt", 31.2001, 29.9187, 5200000),
    City("Casablanca", "Morocco", 33.5731, -7.5898, 3359818),
    City("Addis Ababa", "Ethiopia", 9.1450, 38.7451, 3352000),
    City("Nairobi", "Kenya", -1.2921, 36.8219, 4922000),
    City("Sydney", "Australia", -33.8688, 151.2093, 5312163),
    City("Melbourne", "Australia", -37.8136, 144.9631, 5061439),
    City("Brisbane", "Australia", -27.4698, 153.0251, 2568927),
    City("Perth", "Australia", -31.9505, 115.8605, 2192229),
    City("Auckland", "New Zealand", -36.8485, 174.7633, 1657200),
)

_CITIES_BY_NAME = {city.name: city for city in WORLD_CITIES}


def cities_named(names):
    """Subset of WORLD_CITIES, in the order given."""
    return tuple(_CITIES_BY_NAME[name] for name in names)


# Reference set used by the earthquake model
EARTHQUAKE_CITIES = cities_named((
    "New York", "Los Angeles", "London", "Paris", "Tokyo", "Sydney", "Mumbai",
    "Beijing", "São Paulo", "Mexico City", "Cairo", "Moscow", "Istanbul", "Lagos",
    "Buenos Aires", "Manila", "Jakarta", "Bangkok", "Seoul", "Lima",
))

# Reference set used by the population fallback estimate
POPULATION_FALLBACK_CITIES = cities_named((
    "New York", "Los Angeles", "London", "Paris", "Tokyo", "Sydney", "Mumbai",
    "Beijing", "São Paulo", "Mexico City",
))

# casualty share / survival share per damage tier
CITY_PROXIMITY_VULNERABILITY = {
    'severe': {'casualty_rate': 0.8, 'survival_rate': 0.2},
    'moderate': {'casualty_rate': 0.3, 'survival_rate': 0.7},
    'light': {'casualty_rate': 0.05, 'survival_rate': 0.95},
}

_TIER_ORDER = {'severe': 0, 'moderate': 1, 'light': 2}


def classify_distance(distance_km, radii_km):
    """Most severe tier whose radius covers distance_km, or None."""
    for tier in ('severe', 'moderate', 'light'):
        if distance_km <= radii_km[tier]:
            return tier
    return None


def find_affected_cities(impact_lat, impact_lng, radii_km, cities=WORLD_CITIES):
    """
    Cities inside the damage radii, severe first, then by ascending distance.
    Each city lands in exactly one tier, the innermost one that contains it.
    """
    affected = []
    for city in cities:
        distance = haversine_distance(impact_lat, impact_lng, city.lat, city.lng)
        tier = classify_distance(distance, radii_km)
        if tier is None:
            continue
        rates = CITY_PROXIMITY_VULNERABILITY[tier]
        affected.append(AffectedCity(
            name=city.name,
            country=city.country,
            lat=city.lat,
            lng=city.lng,
            population=city.population,
            distance_km=distance,
            damage_level=tier,
            estimated_casualties=int(round(city.population * rates['casualty_rate'])),
            survival_rate=rates['survival_rate'],
        ))

    affected.sort(key=lambda c: (_TIER_ORDER[c.damage_level], c.distance_km))
    logger.debug("%d of %d cities inside damage radii", len(affected), len(cities))
    return affected
