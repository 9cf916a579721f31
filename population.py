"""
Population exposure and casualty estimates for the hazard zones.

Sources are tried in priority order. The raster source is an extension point
that currently has no data, so the city-table estimate is what normally runs.
"""

import logging

import config
from cities import POPULATION_FALLBACK_CITIES, classify_distance
from geo import haversine_distance
from models import CasualtyEstimate, PopulationExposure

logger = logging.getLogger(__name__)

# fatality / injury share per damage zone
POPULATION_FALLBACK_VULNERABILITY = {
    'severe': {'fatality_rate': 0.5, 'injury_rate': 0.3},
    'moderate': {'fatality_rate': 0.1, 'injury_rate': 0.2},
    'light': {'fatality_rate': 0.01, 'injury_rate': 0.05},
}


def estimate_casualties(population, zone, city=None):
    rates = POPULATION_FALLBACK_VULNERABILITY[zone]
    fatalities = int(round(population * rates['fatality_rate']))
    injuries = int(round(population * rates['injury_rate']))
    return CasualtyEstimate(
        zone=zone,
        population=population,
        fatalities=fatalities,
        injuries=injuries,
        survivors=max(0, population - fatalities - injuries),
        city=city,
    )


def summarize(casualties, source):
    return PopulationExposure(
        total_population=sum(c.population for c in casualties),
        casualties=casualties,
        summary={
            'total_fatalities': sum(c.fatalities for c in casualties),
            'total_injuries': sum(c.injuries for c in casualties),
            'total_survivors': sum(c.survivors for c in casualties),
        },
        source=source,
    )


def radii_from_polygons(hazard_zones):
    """Zone radii (km) read back from hazard features; missing zones are 0."""
    radii = {'severe': 0.0, 'moderate': 0.0, 'light': 0.0}
    for feature in hazard_zones:
        props = feature['properties']
        radii[props['zone']] = props['radius']
    return radii


def exposed_share(distance_km, zone, radii_km):
    """
    Share of a city's population counted as exposed. Full in the severe zone,
    tapering with distance across the moderate and light bands.
    """
    if zone == 'severe':
        return 1.0
    if zone == 'moderate':
        band = radii_km['moderate'] - radii_km['severe']
        reduction = min(0.8, (distance_km - radii_km['severe']) / band * 0.6)
        return 1.0 - reduction
    band = radii_km['light'] - radii_km['moderate']
    reduction = min(0.9, 0.5 + (distance_km - radii_km['moderate']) / band * 0.4)
    return 1.0 - reduction


class PopulationSource:
    """
    Something that can count people inside hazard zones.
    estimate() returns a PopulationExposure, or None when it has no data.
    """

    name = "base"

    def estimate(self, hazard_zones, impact_location):
        raise NotImplementedError


class RasterPopulationSource(PopulationSource):
    """Gridded population density sampled per zone. Not implemented yet: reports no data."""

    name = "raster"

    def __init__(self, raster_path=None):
        self.raster_path = raster_path

    def zone_population(self, feature):
        return 0

    def estimate(self, hazard_zones, impact_location):
        if not self.raster_path:
            return None
        casualties = []
        for feature in hazard_zones:
            population = self.zone_population(feature)
            if population > 0:
                casualties.append(estimate_casualties(population, feature['properties']['zone']))
        if not casualties:
            logger.info("Raster population sampling not available for %s", self.raster_path)
            return None
        return summarize(casualties, self.name)


class CityTablePopulationSource(PopulationSource):
    """Population of the major-city table, discounted by position within each zone."""

    name = "city-table"

    def __init__(self, cities=POPULATION_FALLBACK_CITIES):
        self.cities = cities

    def estimate(self, hazard_zones, impact_location):
        radii = radii_from_polygons(hazard_zones)
        casualties = []
        for city in self.cities:
            distance = haversine_distance(impact_location.lat, impact_location.lng, city.lat, city.lng)
            zone = classify_distance(distance, radii)
            if zone is None:
                continue
            population = int(round(city.population * exposed_share(distance, zone, radii)))
            if population > 0:
                casualties.append(estimate_casualties(population, zone, city=city.name))
        return summarize(casualties, self.name)


def default_sources(raster_path=None):
    return (RasterPopulationSource(raster_path), CityTablePopulationSource())


def calculate_population_exposure(hazard_zones, impact_location, sources=None):
    """
    First usable estimate from the sources, in order. A source that raises or
    reports no data never aborts the simulation; the next one is tried.
    """
    if sources is None:
        sources = default_sources(config.POPULATION_RASTER_PATH)

    for source in sources:
        try:
            exposure = source.estimate(hazard_zones, impact_location)
        except Exception as e:
            logger.warning("Population source %s failed: %s", source.name, e, exc_info=True)
            continue
        if exposure is not None:
            logger.debug("Population exposure from %s: %d people", source.name, exposure.total_population)
            return exposure
        logger.info("Population source %s has no data, falling back", source.name)

    return summarize([], "none")
