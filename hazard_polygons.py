"""
Geodesic circle polygons (GeoJSON Features) for the damage zones around an
impact point, plus point-in-zone queries.

Features are returned largest first so the severe zone is drawn last and
renders on top.
"""

import numpy as np
from pyproj import Geod
from shapely.geometry import Point, shape

from geo import EARTH_RADIUS_KM

DEFAULT_STEPS = 64

# Spherical earth so polygon radii agree with haversine distances
_GEOD = Geod(a=EARTH_RADIUS_KM * 1000.0, b=EARTH_RADIUS_KM * 1000.0)

ZONE_STYLES = {
    'light': {
        'description': "Evacuation Zone - Light damage, broken windows, evacuation recommended",
        'color': "#f59e0b",
        'fillColor': "#fef3c7",
        'fillOpacity': 0.2,
    },
    'moderate': {
        'description': "Major Damage Zone - Severe structural damage, widespread casualties",
        'color': "#ea580c",
        'fillColor': "#fed7aa",
        'fillOpacity': 0.3,
    },
    'severe': {
        'description': "Severe Destruction Zone - Complete devastation, unsurvivable conditions",
        'color': "#dc2626",
        'fillColor': "#fecaca",
        'fillOpacity': 0.4,
    },
}

RENDER_ORDER = ('light', 'moderate', 'severe')
SEVERITY_ORDER = ('severe', 'moderate', 'light')


def unwrap_longitude(lng, center_lng):
    """Longitude shifted by whole turns to lie within 180 degrees of center_lng."""
    return center_lng + ((np.asarray(lng, dtype=float) - center_lng + 180.0) % 360.0 - 180.0)


def geodesic_circle(lat, lng, radius_km, steps=DEFAULT_STEPS):
    """
    Closed, counter-clockwise [lng, lat] ring approximating a circle on the sphere.

    Longitudes stay continuous around the centre, so a ring crossing the
    antimeridian may run past +/-180 instead of wrapping round the globe.
    """
    azimuths = np.linspace(0.0, -360.0, steps, endpoint=False)
    lngs, lats, _ = _GEOD.fwd(
        np.full(steps, float(lng)),
        np.full(steps, float(lat)),
        azimuths,
        np.full(steps, radius_km * 1000.0),
    )
    lngs = unwrap_longitude(lngs, float(lng))
    ring = [[float(x), float(y)] for x, y in zip(lngs, lats)]
    ring.append(ring[0])
    return ring


def generate_single_hazard_polygon(lat, lng, radius_km, zone, steps=DEFAULT_STEPS):
    """GeoJSON Feature for one zone."""
    style = ZONE_STYLES[zone]
    return {
        'type': "Feature",
        'properties': {
            'zone': zone,
            'radius': radius_km,
            'description': style['description'],
            'color': style['color'],
            'fillColor': style['fillColor'],
            'fillOpacity': style['fillOpacity'],
        },
        'geometry': {
            'type': "Polygon",
            'coordinates': [geodesic_circle(lat, lng, radius_km, steps)],
        },
    }


def generate_hazard_polygons(lat, lng, radii_km, steps=DEFAULT_STEPS):
    """
    One Feature per zone with a positive radius, ordered light, moderate, severe
    (outermost first) for drawing.
    """
    return [
        generate_single_hazard_polygon(lat, lng, radii_km[zone], zone, steps)
        for zone in RENDER_ORDER
        if radii_km.get(zone, 0) > 0
    ]


def hazard_polygons_to_geojson(polygons):
    return {'type': "FeatureCollection", 'features': list(polygons)}


def calculate_hazard_zone_area(polygon):
    """Geodesic area of a zone in km^2."""
    area_m2, _ = _GEOD.geometry_area_perimeter(shape(polygon['geometry']))
    return abs(area_m2) / 1e6


def is_point_in_hazard_zone(lat, lng, polygon):
    """True if the point lies inside or on the boundary of the zone."""
    geometry = shape(polygon['geometry'])
    min_x, _, max_x, _ = geometry.bounds
    # query in the ring's own longitude frame
    x = float(unwrap_longitude(lng, (min_x + max_x) / 2.0))
    return geometry.covers(Point(x, lat))


def get_point_hazard_level(lat, lng, polygons):
    """Most severe zone containing the point, or None."""
    by_zone = {p['properties']['zone']: p for p in polygons}
    for zone in SEVERITY_ORDER:
        polygon = by_zone.get(zone)
        if polygon is not None and is_point_in_hazard_zone(lat, lng, polygon):
            return polygon
    return None
