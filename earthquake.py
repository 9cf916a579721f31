"""
Impact-induced ground shaking at reference cities.

The base magnitude is a step function of impact energy; it is attenuated
with distance from the impact and mapped onto a damage band.
"""

import logging

from cities import EARTHQUAKE_CITIES
from geo import haversine_distance
from models import EarthquakeEffect, EarthquakeSummary

logger = logging.getLogger(__name__)

DEFAULT_MAX_DISTANCE_KM = 2000.0
MIN_REPORTED_MAGNITUDE = 1.5
NEAR_FIELD_KM = 100.0
ATTENUATION_SCALE_KM = 2000.0
MIN_ATTENUATION = 0.1

# (minimum energy in MT, base magnitude), highest first
BASE_MAGNITUDE_STEPS = (
    (100000, 9.0),
    (10000, 8.5),
    (1000, 8.0),
    (100, 7.5),
    (10, 7.0),
    (1, 6.5),
    (0.1, 6.0),
    (0.01, 5.5),
)
FLOOR_MAGNITUDE = 5.0

# (minimum magnitude, damage, intensity description), highest first
DAMAGE_BANDS = (
    (8.0, 'catastrophic', 'Great earthquake - massive destruction'),
    (7.0, 'severe', 'Major earthquake - serious damage'),
    (6.0, 'moderate', 'Strong earthquake - considerable damage'),
    (5.0, 'moderate', 'Moderate earthquake - damage to weak structures'),
    (3.0, 'light', 'Light earthquake - minor damage'),
    (2.0, 'light', 'Weak earthquake - felt by people'),
    (MIN_REPORTED_MAGNITUDE, 'none', 'Minor earthquake - detectable by instruments'),
)

# (minimum magnitude, share of the population exposed), highest first
AFFECTED_FRACTION_STEPS = (
    (8.0, 0.95),
    (7.0, 0.80),
    (6.0, 0.60),
    (5.0, 0.35),
    (4.0, 0.15),
    (3.0, 0.05),
)
FLOOR_AFFECTED_FRACTION = 0.01

DISTANCE_DISCOUNT_START_KM = 500.0
DISTANCE_DISCOUNT_SPAN_KM = 2000.0
MIN_DISTANCE_DISCOUNT = 0.1

# fatality / injury rate applied to the affected population
QUAKE_CASUALTY_RATES = {
    'catastrophic': {'fatality_rate': 0.12, 'injury_rate': 0.25},
    'severe': {'fatality_rate': 0.08, 'injury_rate': 0.20},
    'moderate': {'fatality_rate': 0.02, 'injury_rate': 0.08},
    'light': {'fatality_rate': 0.005, 'injury_rate': 0.02},
    'none': {'fatality_rate': 0.0001, 'injury_rate': 0.001},
}


def base_magnitude(energy_mt):
    for threshold, magnitude in BASE_MAGNITUDE_STEPS:
        if energy_mt >= threshold:
            return magnitude
    return FLOOR_MAGNITUDE


def attenuation_factor(distance_km):
    """1.0 in the near field, then decays with (d / 2000)^0.8, floored at 0.1."""
    if distance_km <= NEAR_FIELD_KM:
        return 1.0
    return max(MIN_ATTENUATION, 1.0 - (distance_km / ATTENUATION_SCALE_KM) ** 0.8)


def earthquake_magnitude(energy_mt, distance_km):
    return base_magnitude(energy_mt) * attenuation_factor(distance_km)


def damage_level(magnitude):
    """(damage, intensity) for a magnitude, or None below the reporting floor."""
    for threshold, damage, intensity in DAMAGE_BANDS:
        if magnitude >= threshold:
            return damage, intensity
    return None


def calculate_earthquake_effects(impact_location, energy_mt, max_distance_km=DEFAULT_MAX_DISTANCE_KM,
                                 cities=EARTHQUAKE_CITIES):
    """Shaking at every reference city within max_distance_km, closest first."""
    effects = []
    for city in cities:
        distance = haversine_distance(impact_location.lat, impact_location.lng, city.lat, city.lng)
        if distance > max_distance_km:
            continue
        magnitude = earthquake_magnitude(energy_mt, distance)
        level = damage_level(magnitude)
        if level is None:
            continue
        damage, intensity = level
        effects.append(EarthquakeEffect(city=city, distance_km=distance, magnitude=magnitude,
                                        intensity=intensity, damage=damage))

    effects.sort(key=lambda e: e.distance_km)
    logger.debug("%d of %d reference cities feel shaking", len(effects), len(cities))
    return effects


def affected_fraction(magnitude, distance_km):
    fraction = FLOOR_AFFECTED_FRACTION
    for threshold, share in AFFECTED_FRACTION_STEPS:
        if magnitude >= threshold:
            fraction = share
            break
    if distance_km > DISTANCE_DISCOUNT_START_KM:
        discount = 1.0 - (distance_km - DISTANCE_DISCOUNT_START_KM) / DISTANCE_DISCOUNT_SPAN_KM
        fraction *= max(MIN_DISTANCE_DISCOUNT, discount)
    return fraction


def get_earthquake_summary(effects):
    """Fatality / injury totals and per-band city counts over a list of effects."""
    summary = EarthquakeSummary()
    total_affected = 0.0
    total_fatalities = 0.0
    total_injuries = 0.0

    for effect in effects:
        affected = effect.city.population * affected_fraction(effect.magnitude, effect.distance_km)
        rates = QUAKE_CASUALTY_RATES[effect.damage]
        fatalities = affected * rates['fatality_rate']
        injuries = affected * rates['injury_rate']

        total_affected += affected
        total_fatalities += fatalities
        total_injuries += injuries
        setattr(summary, effect.damage, getattr(summary, effect.damage) + 1)
        summary.breakdown.append({
            'city': effect.city.name,
            'country': effect.city.country,
            'distance_km': effect.distance_km,
            'magnitude': effect.magnitude,
            'damage': effect.damage,
            'affected_population': int(round(affected)),
            'fatalities': int(round(fatalities)),
            'injuries': int(round(injuries)),
        })

    summary.total_affected = int(round(total_affected))
    summary.total_fatalities = int(round(total_fatalities))
    summary.total_injuries = int(round(total_injuries))
    return summary
