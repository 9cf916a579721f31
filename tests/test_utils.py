"""Tests for tabular / JSON export and map building."""
import json

import folium
import pytest

from simulation import simulate_from_values
from utils import (
    affected_cities_to_dataframe,
    casualties_to_dataframe,
    create_folium_map,
    earthquake_effects_to_dataframe,
    export_results_csv,
    export_results_json,
    results_to_dataframe,
)


@pytest.fixture
def sim(new_york):
    return simulate_from_values(500.0, 20.0, 3000.0, 45.0, new_york.lat, new_york.lng)


class TestDataFrames:

    def test_results_row(self, sim):
        df = results_to_dataframe(sim, label="baseline")
        assert len(df) == 1
        row = df.iloc[0]
        assert row['scenario'] == "baseline"
        assert row['energy_megatons'] == sim['impact'].energy_mt
        assert row['severe_radius_km'] == sim['impact'].radii_km['severe']
        assert row['total_fatalities'] == sim['population_exposure'].summary['total_fatalities']

    def test_affected_cities_table(self, sim):
        df = affected_cities_to_dataframe(sim['affected_cities'])
        assert len(df) == len(sim['affected_cities'])
        assert df.iloc[0]['name'] == "New York"

    def test_empty_tables_keep_columns(self):
        assert 'damage_level' in affected_cities_to_dataframe([]).columns
        assert 'magnitude' in earthquake_effects_to_dataframe([]).columns

    def test_casualties_table(self, sim):
        df = casualties_to_dataframe(sim['population_exposure'])
        assert list(df.columns) == ['zone', 'city', 'population', 'fatalities', 'injuries', 'survivors']


class TestExport:

    def test_csv_bytes(self, sim):
        csv = export_results_csv(results_to_dataframe(sim))
        assert csv.startswith(b"scenario,")

    def test_json_expands_records(self, sim):
        payload = json.loads(export_results_json([sim]))
        assert payload[0]['impact']['energy_mt'] == pytest.approx(sim['impact'].energy_mt)
        assert payload[0]['affected_cities'][0]['name'] == "New York"
        assert payload[0]['hazard_zones'][-1]['properties']['zone'] == 'severe'


class TestMap:

    def test_builds_map(self, sim):
        m = create_folium_map(sim)
        assert isinstance(m, folium.Map)
