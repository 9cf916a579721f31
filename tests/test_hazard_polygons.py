"""Tests for hazard-zone GeoJSON polygons."""
import math

import pytest

from geo import haversine_distance
from hazard_polygons import (
    ZONE_STYLES,
    calculate_hazard_zone_area,
    generate_hazard_polygons,
    generate_single_hazard_polygon,
    get_point_hazard_level,
    hazard_polygons_to_geojson,
    is_point_in_hazard_zone,
)

RADII = {'severe': 2.0, 'moderate': 5.0, 'light': 10.0}
KM_PER_DEG_LAT = math.pi * 6371.0 / 180.0


class TestGenerateHazardPolygons:

    def test_largest_first_severe_last(self):
        polygons = generate_hazard_polygons(10.0, 20.0, RADII)
        assert [p['properties']['zone'] for p in polygons] == ['light', 'moderate', 'severe']

    def test_zero_radii_give_no_features(self):
        assert generate_hazard_polygons(0.0, 0.0, {'severe': 0.0, 'moderate': 0.0, 'light': 0.0}) == []

    def test_non_positive_radius_omitted(self):
        polygons = generate_hazard_polygons(0.0, 0.0, {'severe': 0.0, 'moderate': 5.0, 'light': 10.0})
        assert [p['properties']['zone'] for p in polygons] == ['light', 'moderate']

    def test_feature_shape(self):
        feature = generate_hazard_polygons(10.0, 20.0, RADII, steps=32)[0]
        assert feature['type'] == "Feature"
        assert feature['geometry']['type'] == "Polygon"
        ring = feature['geometry']['coordinates'][0]
        assert len(ring) == 33
        assert ring[0] == ring[-1]

    def test_styling_metadata(self):
        for feature in generate_hazard_polygons(10.0, 20.0, RADII):
            props = feature['properties']
            style = ZONE_STYLES[props['zone']]
            assert props['radius'] == RADII[props['zone']]
            assert props['color'] == style['color']
            assert props['fillColor'] == style['fillColor']
            assert props['fillOpacity'] == style['fillOpacity']
            assert props['description']

    def test_vertices_lie_on_radius(self):
        feature = generate_single_hazard_polygon(45.0, 7.0, 100.0, 'moderate')
        for lng, lat in feature['geometry']['coordinates'][0]:
            assert haversine_distance(45.0, 7.0, lat, lng) == pytest.approx(100.0, rel=1e-6)

    def test_feature_collection(self):
        polygons = generate_hazard_polygons(10.0, 20.0, RADII)
        collection = hazard_polygons_to_geojson(polygons)
        assert collection['type'] == "FeatureCollection"
        assert collection['features'] == polygons


class TestHazardZoneArea:

    def test_close_to_circle_area(self):
        feature = generate_single_hazard_polygon(0.0, 0.0, 10.0, 'light')
        assert calculate_hazard_zone_area(feature) == pytest.approx(math.pi * 100.0, rel=1e-2)


class TestPointQueries:

    @pytest.fixture
    def polygons(self):
        return generate_hazard_polygons(0.0, 0.0, RADII)

    def test_center_inside(self, polygons):
        for feature in polygons:
            assert is_point_in_hazard_zone(0.0, 0.0, feature)

    def test_far_point_outside(self, polygons):
        assert not is_point_in_hazard_zone(1.0, 1.0, polygons[0])

    @pytest.mark.parametrize("distance_km,expected", [
        (0.0, 'severe'),
        (1.0, 'severe'),
        (3.5, 'moderate'),
        (7.0, 'light'),
    ])
    def test_most_severe_zone(self, polygons, distance_km, expected):
        lat = distance_km / KM_PER_DEG_LAT
        assert get_point_hazard_level(lat, 0.0, polygons)['properties']['zone'] == expected

    def test_outside_all_zones(self, polygons):
        assert get_point_hazard_level(20.0 / KM_PER_DEG_LAT, 0.0, polygons) is None

    def test_order_of_input_does_not_matter(self, polygons):
        reversed_polygons = list(reversed(polygons))
        assert get_point_hazard_level(0.0, 0.0, reversed_polygons)['properties']['zone'] == 'severe'


class TestAntimeridian:

    RADII = {'severe': 20.0, 'moderate': 50.0, 'light': 100.0}

    @pytest.fixture
    def polygons(self):
        return generate_hazard_polygons(0.0, 179.9, self.RADII)

    def test_ring_stays_near_centre(self, polygons):
        for feature in polygons:
            for lng, _ in feature['geometry']['coordinates'][0]:
                assert abs(lng - 179.9) < 1.0

    def test_impact_point_is_severe(self, polygons):
        assert get_point_hazard_level(0.0, 179.9, polygons)['properties']['zone'] == 'severe'

    def test_point_across_the_line(self, polygons):
        # ~22 km east of the impact, written with a negative longitude
        assert get_point_hazard_level(0.0, -179.9, polygons)['properties']['zone'] == 'moderate'

    def test_far_side_of_the_planet_is_outside(self, polygons):
        assert get_point_hazard_level(0.0, 0.0, polygons) is None
        for feature in polygons:
            assert not is_point_in_hazard_zone(0.0, 0.0, feature)

    def test_area_unaffected_by_crossing(self, polygons):
        light = polygons[0]
        assert calculate_hazard_zone_area(light) == pytest.approx(math.pi * 100.0 ** 2, rel=1e-2)
