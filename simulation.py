"""
Physics-based impact simulation helpers.

Notes:
 - All formulas are simplified, empirical approximations meant for educational/demo purposes.
 - Units:
    diameter_m      : meters
    velocity_km_s   : kilometers/second (converted to m/s internally)
    density_kg_m3   : kg/m^3 (typical rocky asteroid ~ 2600-3000)
    angle_deg       : degrees from horizontal (90 vertical)
    lat/lng         : decimal degrees

Outputs:
 - mass_kg
 - energy_joules
 - energy_mt (megatons TNT)
 - crater_diameter_m / crater_depth_m
 - radii_km: dict of severe / moderate / light damage radii
 - affected_area_km2 (outermost radius)
"""

import logging
import math

import numpy as np

from cities import find_affected_cities
from earthquake import calculate_earthquake_effects, get_earthquake_summary
from hazard_polygons import generate_hazard_polygons
from models import GeoPoint, ImpactInputError, ImpactParameters, ImpactResult
from population import calculate_population_exposure
from secondary_effects import calculate_effects, find_secondary_effect_locations

logger = logging.getLogger(__name__)

# constants
JOULES_PER_MEGATON_TNT = 4.184e15
EARTH_GRAVITY = 9.81  # m/s^2
DEFAULT_DENSITY_KG_M3 = 2600.0
CRATER_DEPTH_RATIO = 6.5  # diameter / depth for complex craters


def mass_from_diameter(diameter_m, density_kg_m3=DEFAULT_DENSITY_KG_M3):
    """Mass of a sphere (asteroid) in kg."""
    r = diameter_m / 2.0
    volume = (4.0 / 3.0) * math.pi * r ** 3
    return density_kg_m3 * volume


def kinetic_energy_joules(mass_kg, velocity_km_s):
    """Kinetic energy in joules."""
    velocity_m_s = velocity_km_s * 1000.0
    return 0.5 * mass_kg * velocity_m_s ** 2


def energy_megatons(energy_joules):
    return energy_joules / JOULES_PER_MEGATON_TNT


def calculate_impact_energy(diameter_m, velocity_km_s, density_kg_m3=DEFAULT_DENSITY_KG_M3):
    """
    Impact energy in megatons TNT for a spherical impactor.
    No validation: zero or negative inputs give zero or negative energy.
    """
    m = mass_from_diameter(diameter_m, density_kg_m3)
    return energy_megatons(kinetic_energy_joules(m, velocity_km_s))


def estimate_crater_diameter(energy_joules, density_kg_m3=DEFAULT_DENSITY_KG_M3, angle_deg=90.0):
    """
    Simplified complex-crater scaling law:
        D = 1.8 * (E / (g * rho))^0.25 * sin(angle)^(1/3)
    Returns crater diameter in meters. A grazing impact (angle 0) collapses to 0,
    negative energy gives NaN.
    """
    angle_rad = math.radians(angle_deg)
    with np.errstate(invalid="ignore", divide="ignore"):
        scaled = np.power(energy_joules / (EARTH_GRAVITY * density_kg_m3), 0.25)
        crater_diameter_m = 1.8 * scaled * np.cbrt(np.sin(angle_rad))
    return float(crater_diameter_m)


class RadiusScaling:
    """
    Damage-radius scaling law: radius_km = cbrt(energy_mt * yield_factor) * multiplier.

    yield_factor converts megatons to the yield unit the multipliers were fit
    against (1 for megatons, 1000 for kilotons). Subclasses may override
    radii_km for laws of a different shape.
    """

    def __init__(self, name, severe, moderate, light, yield_factor=1.0):
        self.name = name
        self.multipliers = {'severe': severe, 'moderate': moderate, 'light': light}
        self.yield_factor = yield_factor

    def radii_km(self, energy_mt):
        base = float(np.cbrt(energy_mt * self.yield_factor))
        return {zone: base * mult for zone, mult in self.multipliers.items()}

    def __repr__(self):
        return f"RadiusScaling({self.name!r})"


CUBE_ROOT_MEGATON_SCALING = RadiusScaling("cube-root-megaton", 2.0, 5.0, 10.0)
# >100 kPa / 10-100 kPa / 1-10 kPa overpressure, TNT blast scaling in kilotons
OVERPRESSURE_KILOTON_SCALING = RadiusScaling("overpressure-kiloton", 0.54, 1.78, 4.71, yield_factor=1000.0)

RADIUS_SCALINGS = {s.name: s for s in (CUBE_ROOT_MEGATON_SCALING, OVERPRESSURE_KILOTON_SCALING)}


def estimate_damage_radii(energy_mt, scaling=CUBE_ROOT_MEGATON_SCALING):
    """Severe / moderate / light radii in km for the given energy."""
    return scaling.radii_km(energy_mt)


def calculate_impact(diameter_m, density_kg_m3, velocity_km_s, angle_deg=90.0,
                     scaling=CUBE_ROOT_MEGATON_SCALING):
    """
    Mass, energy, crater size and damage radii for one impactor.
    Pure function, no validation.
    """
    m = mass_from_diameter(diameter_m, density_kg_m3)
    E = kinetic_energy_joules(m, velocity_km_s)
    E_mt = energy_megatons(E)
    crater_d = estimate_crater_diameter(E, density_kg_m3, angle_deg)
    return ImpactResult(
        mass_kg=m,
        energy_joules=E,
        energy_mt=E_mt,
        crater_diameter_m=crater_d,
        crater_depth_m=crater_d / CRATER_DEPTH_RATIO,
        radii_km=estimate_damage_radii(E_mt, scaling),
    )


def area_from_radius_km(radius_km):
    """Area in km^2 for given radius in km."""
    return math.pi * radius_km ** 2


def classify_impact(energy_mt):
    """Headline severity class and description for an energy in megatons."""
    if energy_mt < 1:
        return 'Minor', 'Local damage, similar to a small building collapse'
    if energy_mt < 100:
        return 'Moderate', 'City-wide destruction, similar to the Hiroshima bomb'
    if energy_mt < 10000:
        return 'Major', 'Regional devastation, affects entire metropolitan areas'
    if energy_mt < 1000000:
        return 'Catastrophic', 'Continental damage, climate effects for years'
    return 'Extinction Level', 'Global catastrophe, mass extinction event'


def environmental_effects(energy_mt):
    """Qualitative climate / biodiversity / reach text for an energy in megatons."""
    if energy_mt < 1:
        return {
            'climate': "Minimal climate impact. Localized dust and debris.",
            'biodiversity': "Minimal effect on wildlife. Possible injuries to nearby animals.",
            'affected_area': "< 1 km radius",
        }
    if energy_mt < 100:
        return {
            'climate': "Local climate disruption. Dust in atmosphere for weeks.",
            'biodiversity': "Significant wildlife casualties in impact zone.",
            'affected_area': "1-10 km radius",
        }
    if energy_mt < 10000:
        return {
            'climate': "Regional climate effects. Dust blocking sunlight for months.",
            'biodiversity': "Mass extinction event for local species. Food chain disruption.",
            'affected_area': "10-100 km radius",
        }
    return {
        'climate': "Global climate catastrophe. Nuclear winter scenario. Years of darkness.",
        'biodiversity': "Mass extinction event. 70%+ of species at risk.",
        'affected_area': "Global impact",
    }


def validate_impact_inputs(params, location):
    """Range-check inputs before they reach the core. Raises ImpactInputError."""
    if not params.diameter_m > 0:
        raise ImpactInputError(f"Diameter must be positive, got {params.diameter_m} m")
    if not params.velocity_km_s > 0:
        raise ImpactInputError(f"Velocity must be positive, got {params.velocity_km_s} km/s")
    if not params.density_kg_m3 > 0:
        raise ImpactInputError(f"Density must be positive, got {params.density_kg_m3} kg/m^3")
    if not 0 < params.angle_deg <= 90:
        raise ImpactInputError(f"Impact angle must be in (0, 90] degrees, got {params.angle_deg}")
    if not -90 <= location.lat <= 90:
        raise ImpactInputError(f"Latitude must be between -90 and 90, got {location.lat}")
    if not -180 <= location.lng <= 180:
        raise ImpactInputError(f"Longitude must be between -180 and 180, got {location.lng}")


def simulate_impact(params, location, scaling=CUBE_ROOT_MEGATON_SCALING, population_sources=None):
    """
    Main simulation function. Validates inputs, then runs the full pipeline
    and returns a dictionary with every derived result.
    """
    validate_impact_inputs(params, location)

    impact = calculate_impact(params.diameter_m, params.density_kg_m3, params.velocity_km_s,
                              params.angle_deg, scaling=scaling)
    logger.debug("Impact energy %.3e J (%.3e MT) using %s", impact.energy_joules, impact.energy_mt, scaling.name)

    hazard_zones = generate_hazard_polygons(location.lat, location.lng, impact.radii_km)
    affected_cities = find_affected_cities(location.lat, location.lng, impact.radii_km)
    quake_effects = calculate_earthquake_effects(location, impact.energy_mt)
    exposure = calculate_population_exposure(hazard_zones, location, sources=population_sources)
    secondary = calculate_effects(params.diameter_m, params.velocity_km_s, params.angle_deg,
                                  energy_mt=impact.energy_mt)
    impact_class, description = classify_impact(impact.energy_mt)

    zone_results = [
        {
            'zone': c.zone,
            'city': c.city,
            'population': c.population,
            'fatalities': c.fatalities,
            'injuries': c.injuries,
            'survivors': c.survivors,
            'damage_radius_km': impact.radii_km[c.zone],
        }
        for c in exposure.casualties
    ]

    # Package results
    out = {
        'input': {
            'diameter_m': params.diameter_m,
            'velocity_km_s': params.velocity_km_s,
            'density_kg_m3': params.density_kg_m3,
            'angle_deg': params.angle_deg,
            'lat': location.lat,
            'lng': location.lng,
        },
        'radius_scaling': scaling.name,
        'impact': impact,
        'classification': {'class': impact_class, 'description': description},
        'environment': environmental_effects(impact.energy_mt),
        'hazard_zones': hazard_zones,
        'affected_cities': affected_cities,
        'earthquake_effects': quake_effects,
        'earthquake_summary': get_earthquake_summary(quake_effects),
        'secondary_effects': secondary,
        'secondary_locations': find_secondary_effect_locations(location, impact.energy_mt),
        'population_exposure': exposure,
        'zone_results': zone_results,
        'affected_area_km2': area_from_radius_km(max(impact.radii_km.values())),
    }
    logger.info("Simulated %.0f m impactor at (%.4f, %.4f): %d affected cities, %d earthquake effects",
                params.diameter_m, location.lat, location.lng, len(affected_cities), len(quake_effects))
    return out


def simulate_from_values(diameter_m, velocity_km_s, density_kg_m3=3000.0, angle_deg=45.0,
                         lat=0.0, lng=0.0, scaling=CUBE_ROOT_MEGATON_SCALING):
    """Convenience wrapper taking raw numbers instead of records."""
    params = ImpactParameters(diameter_m=diameter_m, velocity_km_s=velocity_km_s,
                              density_kg_m3=density_kg_m3, angle_deg=angle_deg)
    return simulate_impact(params, GeoPoint(lat=lat, lng=lng), scaling=scaling)
