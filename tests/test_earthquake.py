"""Tests for the earthquake effect model."""
import pytest

from earthquake import (
    affected_fraction,
    attenuation_factor,
    base_magnitude,
    calculate_earthquake_effects,
    damage_level,
    get_earthquake_summary,
)
from models import City, EarthquakeEffect, GeoPoint


class TestBaseMagnitude:

    @pytest.mark.parametrize("energy_mt,expected", [
        (1e6, 9.0),
        (100000, 9.0),
        (99999, 8.5),
        (10000, 8.5),
        (1000, 8.0),
        (100, 7.5),
        (10, 7.0),
        (1, 6.5),
        (0.1, 6.0),
        (0.01, 5.5),
        (0.005, 5.0),
        (0.0, 5.0),
    ])
    def test_steps(self, energy_mt, expected):
        assert base_magnitude(energy_mt) == expected


class TestAttenuation:

    def test_near_field_unattenuated(self):
        assert attenuation_factor(0.0) == 1.0
        assert attenuation_factor(100.0) == 1.0

    def test_decay(self):
        assert attenuation_factor(1000.0) == pytest.approx(1.0 - 0.5 ** 0.8)

    def test_floor(self):
        assert attenuation_factor(1990.0) == 0.1
        assert attenuation_factor(5000.0) == 0.1

    def test_monotonic_beyond_near_field(self):
        values = [attenuation_factor(d) for d in (150.0, 400.0, 800.0, 1500.0)]
        assert values == sorted(values, reverse=True)


class TestDamageLevel:

    @pytest.mark.parametrize("magnitude,damage,intensity_start", [
        (9.0, 'catastrophic', 'Great'),
        (8.0, 'catastrophic', 'Great'),
        (7.5, 'severe', 'Major'),
        (6.2, 'moderate', 'Strong'),
        (5.5, 'moderate', 'Moderate'),
        (4.0, 'light', 'Light'),
        (2.5, 'light', 'Weak'),
        (1.7, 'none', 'Minor'),
    ])
    def test_bands(self, magnitude, damage, intensity_start):
        got_damage, intensity = damage_level(magnitude)
        assert got_damage == damage
        assert intensity.startswith(intensity_start)

    def test_below_floor(self):
        assert damage_level(1.4) is None


class TestEarthquakeEffects:

    def test_impact_at_city(self, tokyo):
        effects = calculate_earthquake_effects(tokyo, 1000.0)
        first = effects[0]
        assert first.city.name == "Tokyo"
        assert first.distance_km == pytest.approx(0.0, abs=1e-9)
        assert first.magnitude == 8.0
        assert first.damage == 'catastrophic'

    def test_sorted_and_filtered(self, tokyo):
        effects = calculate_earthquake_effects(tokyo, 1e5)
        distances = [e.distance_km for e in effects]
        assert distances == sorted(distances)
        assert all(e.distance_km <= 2000.0 for e in effects)
        assert all(e.magnitude >= 1.5 for e in effects)

    def test_max_distance(self, tokyo):
        effects = calculate_earthquake_effects(tokyo, 1e5, max_distance_km=50.0)
        assert [e.city.name for e in effects] == ["Tokyo"]

    def test_weak_distant_shaking_excluded(self):
        cities = (City("Near", "X", 0.0, 0.5, 1000), City("Far", "X", 0.0, 17.0, 1000))
        effects = calculate_earthquake_effects(GeoPoint(0.0, 0.0), 0.001, cities=cities)
        assert [e.city.name for e in effects] == ["Near"]
        assert effects[0].magnitude == 5.0
        assert effects[0].damage == 'moderate'


def _effect(population, magnitude, distance_km, damage):
    return EarthquakeEffect(
        city=City("Test", "X", 0.0, 0.0, population),
        distance_km=distance_km,
        magnitude=magnitude,
        intensity="",
        damage=damage,
    )


class TestEarthquakeSummary:

    def test_empty(self):
        summary = get_earthquake_summary([])
        assert summary.total_affected == 0
        assert summary.total_fatalities == 0
        assert summary.total_injuries == 0
        assert (summary.catastrophic, summary.severe, summary.moderate, summary.light, summary.none) == (0, 0, 0, 0, 0)
        assert summary.breakdown == []

    def test_catastrophic_near_field(self):
        summary = get_earthquake_summary([_effect(1_000_000, 8.0, 50.0, 'catastrophic')])
        assert summary.total_affected == 950_000
        assert summary.total_fatalities == 114_000
        assert summary.total_injuries == 237_500
        assert summary.catastrophic == 1

    def test_distance_discount(self):
        summary = get_earthquake_summary([_effect(1_000_000, 7.0, 1000.0, 'severe')])
        assert summary.total_affected == 600_000
        assert summary.total_fatalities == 48_000
        assert summary.total_injuries == 120_000

    def test_counts_and_breakdown(self):
        effects = [
            _effect(1_000_000, 8.2, 10.0, 'catastrophic'),
            _effect(500_000, 5.5, 300.0, 'moderate'),
            _effect(200_000, 2.5, 900.0, 'light'),
            _effect(100_000, 1.6, 1500.0, 'none'),
        ]
        summary = get_earthquake_summary(effects)
        assert (summary.catastrophic, summary.severe, summary.moderate, summary.light, summary.none) == (1, 0, 1, 1, 1)
        assert len(summary.breakdown) == 4
        assert summary.total_fatalities == sum(row['fatalities'] for row in summary.breakdown)

    @pytest.mark.parametrize("magnitude,expected", [
        (8.0, 0.95), (7.0, 0.80), (6.0, 0.60), (5.0, 0.35), (4.0, 0.15), (3.0, 0.05), (2.0, 0.01),
    ])
    def test_affected_fraction_bands(self, magnitude, expected):
        assert affected_fraction(magnitude, 100.0) == expected

    def test_affected_fraction_floor(self):
        assert affected_fraction(8.0, 5000.0) == pytest.approx(0.95 * 0.1)
