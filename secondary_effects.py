"""
Secondary (non-blast) consequences of an impact: tsunami, airblast,
thermal radiation, seismic source magnitude, global cooling, debris and
impact winter, plus which reference locations fall inside each effect's reach.

Every effect is a function of the normalised energy E / 1e20 J (~24 MT).
"""

import math
from collections import namedtuple

import numpy as np

from geo import haversine_distance


JOULES_PER_MEGATON_TNT = 4.184e15
REFERENCE_ENERGY_J = 1e20
DEFAULT_DENSITY_KG_M3 = 3000.0

Location = namedtuple(
    "Location",
    ["name", "country", "region", "lat", "lng", "population", "coastal", "elevation_m"],
)

# Global locations with coastal exposure and elevation (m above sea level)
GLOBAL_LOCATIONS = (
    Location("Tokyo", "Japan", "East Asia", 35.6762, 139.6503, 37435191, True, 40),
    Location("New York", "USA", "North America", 40.7128, -74.0060, 8336817, True, 10),
    Location("Los Angeles", "USA", "North America", 34.0522, -118.2437, 3979576, True, 87),
    Location("Miami", "USA", "North America", 25.7617, -80.1918, 470914, True, 2),
    Location("San Francisco", "USA", "North America", 37.7749, -122.4194, 883305, True, 16),
    Location("Sydney", "Australia", "Oceania", -33.8688, 151.2093, 5312163, True, 58),
    Location("Mumbai", "India", "South Asia", 19.0760, 72.8777, 20667656, True, 14),
    Location("Rio de Janeiro", "Brazil", "South America", -22.9068, -43.1729, 6748000, True, 2),
    Location("London", "UK", "Europe", 51.5074, -0.1278, 9304016, True, 35),
    Location("Barcelona", "Spain", "Europe", 41.3851, 2.1734, 1620343, True, 12),
    Location("Singapore", "Singapore", "Southeast Asia", 1.3521, 103.8198, 5453566, True, 15),
    Location("Hong Kong", "China", "East Asia", 22.3193, 114.1694, 7428887, True, 22),
    Location("Cape Town", "South Africa", "Africa", -33.9249, 18.4241, 4617560, True, 25),
    Location("Istanbul", "Turkey", "Europe/Asia", 41.0082, 28.9784, 15636243, True, 39),
    Location("Mexico City", "Mexico", "North America", 19.4326, -99.1332, 9209944, False, 2240),
    Location("Delhi", "India", "South Asia", 28.7041, 77.1025, 32941308, False, 216),
    Location("São Paulo", "Brazil", "South America", -23.5505, -46.6333, 12325232, False, 760),
    Location("Moscow", "Russia", "Europe", 55.7558, 37.6176, 12615279, False, 156),
    Location("Beijing", "China", "East Asia", 39.9042, 116.4074, 21766214, False, 43),
    Location("Cairo", "Egypt", "Africa", 30.0444, 31.2357, 21750020, False, 74),
    Location("Tehran", "Iran", "Middle East", 35.6892, 51.3890, 8693706, False, 1200),
    Location("Johannesburg", "South Africa", "Africa", -26.2041, 28.0473, 4803262, False, 1753),
    Location("Honolulu", "USA", "Pacific", 21.3099, -157.8581, 345064, True, 6),
    Location("Manila", "Philippines", "Southeast Asia", 14.5995, 120.9842, 14808137, True, 16),
    Location("Jakarta", "Indonesia", "Southeast Asia", -6.2088, 106.8456, 10562088, True, 8),
    Location("Maldives", "Maldives", "Indian Ocean", 3.2028, 73.2207, 540544, True, 1),
)


def _kinetic_energy_joules(diameter_m, velocity_km_s, density_kg_m3):
    radius_m = diameter_m / 2.0
    mass_kg = density_kg_m3 * (4.0 / 3.0) * math.pi * radius_m ** 3
    return 0.5 * mass_kg * (velocity_km_s * 1000.0) ** 2


def calculate_effects(diameter_m, velocity_km_s, angle_deg=45.0, energy_mt=None,
                      density_kg_m3=DEFAULT_DENSITY_KG_M3, ocean_impact=True):
    """
    Secondary effects of an impact. When energy_mt is given it overrides the
    energy derived from diameter / velocity / density.

    Returns tsunami height (m), airblast and thermal radii (km), global seismic
    source magnitude, temperature drop (deg C), global debris thickness (cm),
    impact winter duration (months) and the energy used (MT).
    """
    if energy_mt is not None:
        energy_joules = energy_mt * JOULES_PER_MEGATON_TNT
    else:
        energy_joules = _kinetic_energy_joules(diameter_m, velocity_km_s, density_kg_m3)
        energy_mt = energy_joules / JOULES_PER_MEGATON_TNT
    energy_scale = energy_joules / REFERENCE_ENERGY_J

    with np.errstate(invalid="ignore", divide="ignore"):
        cube_root_scale = float(np.cbrt(energy_scale))
        # Collins et al. (2005), deep water; oblique impacts couple less energy into the water
        tsunami_height_m = 0.0
        if ocean_impact:
            angle_effect = math.sin(math.radians(angle_deg))
            tsunami_height_m = 0.1 * cube_root_scale * 1000.0 * float(np.power(angle_effect, 0.5))
        # Toon et al. (1997), 1 bar overpressure
        airblast_radius_km = 50.0 * cube_root_scale
        # Schultz & Gault (1975)
        seismic_magnitude = float(0.67 * np.log10(energy_joules) - 5.87)
        temperature_drop_c = min(10.0, 2.0 * float(np.power(energy_scale, 0.25)))
        impact_winter_months = 0.0
        if diameter_m > 1000.0:
            impact_winter_months = min(24.0, 6.0 * float(np.power(energy_scale, 0.2)))
        # 1st/2nd degree burns
        thermal_radius_km = 7.2 * float(np.power(energy_mt, 0.4))

    # Alvarez et al. (1980): thickness ~ (diameter / 10 km)^3 cm
    debris_thickness_cm = (diameter_m / 1000.0 / 10.0) ** 3

    return {
        'tsunami_height_m': tsunami_height_m,
        'airblast_radius_km': airblast_radius_km,
        'thermal_radius_km': thermal_radius_km,
        'temperature_drop_c': temperature_drop_c,
        'seismic_magnitude': seismic_magnitude,
        'debris_thickness_cm': debris_thickness_cm,
        'impact_winter_months': impact_winter_months,
        'energy_megatons': energy_mt,
    }


def tsunami_risk(elevation_m, distance_km):
    if elevation_m <= 5 and distance_km <= 1000:
        return 'extreme'
    if elevation_m <= 20 and distance_km <= 3000:
        return 'high'
    if elevation_m <= 50 and distance_km <= 5000:
        return 'moderate'
    return 'low'


def effect_ranges_km(energy_mt):
    """Maximum reach of tsunami, seismic and airblast effects for an energy."""
    scale = energy_mt / 100.0
    with np.errstate(invalid="ignore"):
        cube_root_scale = float(np.cbrt(scale))
        return {
            'tsunami': min(10000.0, 2000.0 * cube_root_scale),
            'seismic': min(15000.0, 3000.0 * float(np.power(scale, 0.25))),
            'airblast': 500.0 * cube_root_scale,
        }


CLIMATE_GLOBAL_THRESHOLD_MT = 1000.0
REGIONAL_CLIMATE_RANGE_KM = 5000.0
MAX_COASTAL_ELEVATION_M = 100


def find_secondary_effect_locations(impact_location, energy_mt, locations=GLOBAL_LOCATIONS):
    """
    Reference locations reached by each secondary effect, closest first.
    Each entry is a dict of the location fields plus distance_km.
    """
    ranges = effect_ranges_km(energy_mt)
    placed = []
    for loc in locations:
        entry = loc._asdict()
        entry['distance_km'] = haversine_distance(impact_location.lat, impact_location.lng, loc.lat, loc.lng)
        placed.append(entry)
    by_distance = sorted(placed, key=lambda e: e['distance_km'])

    tsunami = []
    for entry in by_distance:
        if entry['coastal'] and entry['elevation_m'] < MAX_COASTAL_ELEVATION_M \
                and entry['distance_km'] <= ranges['tsunami']:
            tsunami.append(dict(entry, tsunami_risk=tsunami_risk(entry['elevation_m'], entry['distance_km'])))

    if energy_mt >= CLIMATE_GLOBAL_THRESHOLD_MT:
        climate = list(placed)
    else:
        climate = [e for e in placed if e['distance_km'] <= REGIONAL_CLIMATE_RANGE_KM]

    return {
        'tsunami_coasts': tsunami[:15],
        'seismic_regions': [e for e in by_distance if e['distance_km'] <= ranges['seismic']][:20],
        'climate_areas': climate[:25],
        'airblast_zones': [e for e in by_distance if e['distance_km'] <= ranges['airblast']][:10],
    }
