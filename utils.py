import dataclasses
import json
import math

import folium
import pandas as pd

# colors for affected-city markers, by damage tier
TIER_COLORS = {'severe': '#dc2626', 'moderate': '#ea580c', 'light': '#f59e0b'}


def results_to_dataframe(sim_result, label="impact"):
    """
    Convert a simulate_impact result to a one-row pandas DataFrame for export or display.
    """
    row = {'scenario': label}
    row.update(sim_result['input'])
    impact = sim_result['impact']
    row.update({
        'radius_scaling': sim_result['radius_scaling'],
        'mass_kg': impact.mass_kg,
        'energy_joules': impact.energy_joules,
        'energy_megatons': impact.energy_mt,
        'crater_diameter_m': impact.crater_diameter_m,
        'crater_depth_m': impact.crater_depth_m,
        'impact_class': sim_result['classification']['class'],
        'affected_area_km2': sim_result['affected_area_km2'],
    })
    for zone, radius_km in impact.radii_km.items():
        row[f'{zone}_radius_km'] = radius_km
    for k, v in sim_result['secondary_effects'].items():
        row[k] = v
    summary = sim_result['population_exposure'].summary
    row['exposed_population'] = sim_result['population_exposure'].total_population
    row.update(summary)
    row['earthquake_fatalities'] = sim_result['earthquake_summary'].total_fatalities
    return pd.DataFrame([row])


def affected_cities_to_dataframe(affected_cities):
    columns = ['name', 'country', 'lat', 'lng', 'population', 'distance_km',
               'damage_level', 'estimated_casualties', 'survival_rate']
    return pd.DataFrame([dataclasses.asdict(c) for c in affected_cities], columns=columns)


def earthquake_effects_to_dataframe(effects):
    rows = [{
        'city': e.city.name,
        'country': e.city.country,
        'population': e.city.population,
        'distance_km': e.distance_km,
        'magnitude': e.magnitude,
        'intensity': e.intensity,
        'damage': e.damage,
    } for e in effects]
    return pd.DataFrame(rows, columns=['city', 'country', 'population', 'distance_km',
                                       'magnitude', 'intensity', 'damage'])


def casualties_to_dataframe(exposure):
    return pd.DataFrame([dataclasses.asdict(c) for c in exposure.casualties],
                        columns=['zone', 'city', 'population', 'fatalities', 'injuries', 'survivors'])


def _zoom_for_radius(radius_km):
    if radius_km <= 0:
        return 2
    # roughly fit the outer zone into a ~700 px map
    return int(max(2, min(12, 9 - math.log2(max(radius_km, 1.0) / 10.0))))


def create_folium_map(sim_result, map_tiles='OpenStreetMap', popup=True):
    """
    Create a folium map with the hazard zone polygons, the crater and markers
    for affected cities.
    """
    lat = sim_result['input']['lat']
    lng = sim_result['input']['lng']
    radii = sim_result['impact'].radii_km
    m = folium.Map(location=[lat, lng], tiles=map_tiles, zoom_start=_zoom_for_radius(max(radii.values())))

    # zones arrive outermost first, so severe is drawn on top
    for feature in sim_result['hazard_zones']:
        props = feature['properties']
        folium.GeoJson(
            feature,
            style_function=lambda f: {
                'color': f['properties']['color'],
                'fillColor': f['properties']['fillColor'],
                'fillOpacity': f['properties']['fillOpacity'],
                'weight': 2,
            },
            tooltip=f"{props['zone']}: {props['radius']:.1f} km" if popup else None,
        ).add_to(m)

    crater_radius = max(1.0, sim_result['impact'].crater_diameter_m / 2.0)
    folium.Circle(location=[lat, lng],
                  radius=crater_radius,
                  color='black',
                  fill=True,
                  fill_opacity=0.6,
                  popup=f"Crater radius ~ {crater_radius:.1f} m" if popup else None).add_to(m)
    folium.CircleMarker([lat, lng], radius=5, color='black', fill=True, fill_color='black',
                        popup="Impact Point" if popup else None).add_to(m)

    for city in sim_result['affected_cities']:
        folium.CircleMarker(
            [city.lat, city.lng],
            radius=4,
            color=TIER_COLORS.get(city.damage_level, '#3388ff'),
            fill=True,
            popup=(f"{city.name}, {city.country}: {city.damage_level}, "
                   f"{city.estimated_casualties:,} casualties") if popup else None,
        ).add_to(m)
    return m


def export_results_csv(df_all):
    """
    Returns CSV bytes for download.
    """
    return df_all.to_csv(index=False).encode('utf-8')


def _json_default(obj):
    if dataclasses.is_dataclass(obj):
        return dataclasses.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def export_results_json(list_of_results):
    """
    Return json bytes. Dataclass records are expanded to plain dicts.
    """
    return json.dumps(list_of_results, indent=2, default=_json_default).encode('utf-8')
