# app.py
import logging
import sys
from datetime import datetime

import pandas as pd
import streamlit as st
from streamlit_folium import folium_static

import config
from catalog import fetch_neo, neo_to_parameters
from models import GeoPoint, ImpactInputError, ImpactParameters
from simulation import RADIUS_SCALINGS, CUBE_ROOT_MEGATON_SCALING, simulate_impact
from utils import (affected_cities_to_dataframe, casualties_to_dataframe, create_folium_map,
                   earthquake_effects_to_dataframe, export_results_csv, export_results_json,
                   results_to_dataframe)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger('app')

# APP CONFIG
st.set_page_config(page_title="Asteroid Impact Consequences", layout="wide", initial_sidebar_state="expanded")

st.markdown(
    """
    <style>
        .header-container {
            display: flex;
            align-items: center;
            justify-content: left;
            background-color: #0b3d91;
            padding: 10px 20px;
            border-radius: 12px;
            color: white;
        }
        .header-container h1 {
            font-size: 26px;
            margin: 0;
        }
    </style>
    <div class="header-container">
        <h1>Asteroid Impact Consequences Simulator</h1>
    </div>
    """,
    unsafe_allow_html=True
)

# defaults, replaced when a NEO is loaded from the catalog
defaults = st.session_state.setdefault('defaults', {'diameter_m': 1000.0, 'velocity_km_s': 20.0})

# --- Sidebar: Catalog / Inputs / Model selection ---
with st.sidebar:
    st.title("Impact Simulator")
    st.markdown("---")
    st.subheader("Load from NASA NEO catalog")
    neo_id = st.text_input("NEO reference ID", value="", help="e.g. 3542519; leave empty to enter values by hand")
    if st.button("Load asteroid") and neo_id.strip():
        neo = fetch_neo(neo_id.strip())
        if neo is None:
            st.warning("Asteroid could not be fetched; keep using manual values.")
        else:
            loaded = neo_to_parameters(neo)
            defaults.update(diameter_m=loaded.diameter_m, velocity_km_s=loaded.velocity_km_s)
            st.success(f"Loaded {neo.get('name', neo_id)}")

    st.markdown("---")
    st.subheader("Input asteroid parameters")
    diameter = st.number_input("Diameter (m)", value=float(defaults['diameter_m']), min_value=0.0, step=10.0,
                               format="%.2f", help="Diameter of asteroid in meters")
    velocity = st.number_input("Velocity (km/s)", value=float(defaults['velocity_km_s']), min_value=0.0,
                               step=0.1, format="%.2f")
    density = st.number_input("Density (kg/m³)", value=3000.0, min_value=0.0, step=10.0)
    angle = st.slider("Impact angle (degrees from horizontal)", min_value=1, max_value=90, value=45)
    lat = st.number_input("Impact latitude", value=40.7128, format="%.6f")
    lng = st.number_input("Impact longitude", value=-74.0060, format="%.6f")

    st.markdown("---")
    st.subheader("Damage-radius model")
    scaling_name = st.selectbox("Scaling law", list(RADIUS_SCALINGS),
                                index=list(RADIUS_SCALINGS).index(CUBE_ROOT_MEGATON_SCALING.name))

    st.markdown("---")
    run_button = st.button("Run Simulation")

# --- Main layout ---
st.header("Asteroid impact consequences")
st.markdown("""
This app estimates the energy, crater, damage zones, affected cities, earthquake shaking and
secondary effects of an asteroid impact using simplified published scaling laws.
**Units:** diameter in meters, velocity in km/s, radii and distances in km.
**Note:** Results are approximations for educational use only.
""")

if run_button:
    params = ImpactParameters(diameter_m=diameter, velocity_km_s=velocity, density_kg_m3=density,
                              angle_deg=float(angle))
    location = GeoPoint(lat=lat, lng=lng)
    try:
        with st.spinner("Running simulation..."):
            sim = simulate_impact(params, location, scaling=RADIUS_SCALINGS[scaling_name])
    except ImpactInputError as e:
        logger.info("Rejected impact inputs: %s", e)
        st.error(str(e))
        st.stop()

    impact = sim['impact']
    exposure = sim['population_exposure']

    # Display summary cards
    st.markdown("## Results Summary")
    st.markdown(f"**{sim['classification']['class']}**: {sim['classification']['description']}")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Energy (megatons TNT)", f"{impact.energy_mt:.3e}")
    c2.metric("Crater diameter (m)", f"{impact.crater_diameter_m:,.1f}")
    c3.metric("Severe radius (km)", f"{impact.radii_km['severe']:,.2f}")
    c4.metric("Estimated fatalities", f"{exposure.summary['total_fatalities']:,}")

    # Map visualization
    st.markdown("## Hazard zones")
    folium_static(create_folium_map(sim), width=1100, height=520)

    st.markdown("## Affected cities")
    df_cities = affected_cities_to_dataframe(sim['affected_cities'])
    if df_cities.empty:
        st.info("No major city lies inside the damage radii.")
    else:
        st.dataframe(df_cities, height=260)

    st.markdown("## Population exposure")
    p1, p2, p3 = st.columns(3)
    p1.metric("Fatalities", f"{exposure.summary['total_fatalities']:,}")
    p2.metric("Injuries", f"{exposure.summary['total_injuries']:,}")
    p3.metric("Survivors", f"{exposure.summary['total_survivors']:,}")
    st.caption(f"Source: {exposure.source}")
    st.dataframe(casualties_to_dataframe(exposure), height=220)

    st.markdown("## Earthquake effects")
    quake = sim['earthquake_summary']
    q1, q2, q3 = st.columns(3)
    q1.metric("Population shaken", f"{quake.total_affected:,}")
    q2.metric("Earthquake fatalities", f"{quake.total_fatalities:,}")
    q3.metric("Earthquake injuries", f"{quake.total_injuries:,}")
    st.dataframe(earthquake_effects_to_dataframe(sim['earthquake_effects']), height=220)

    st.markdown("## Secondary effects")
    fx = sim['secondary_effects']
    s1, s2, s3, s4 = st.columns(4)
    s1.metric("Tsunami height (m)", f"{fx['tsunami_height_m']:,.0f}")
    s2.metric("Airblast radius (km)", f"{fx['airblast_radius_km']:,.1f}")
    s3.metric("Thermal radius (km)", f"{fx['thermal_radius_km']:,.1f}")
    s4.metric("Seismic magnitude", f"{fx['seismic_magnitude']:.1f}")
    s5, s6, s7 = st.columns(3)
    s5.metric("Temperature drop (°C)", f"{fx['temperature_drop_c']:.1f}")
    s6.metric("Debris thickness (cm)", f"{fx['debris_thickness_cm']:.2f}")
    s7.metric("Impact winter (months)", f"{fx['impact_winter_months']:.0f}")

    env = sim['environment']
    st.write(f"**Climate:** {env['climate']}")
    st.write(f"**Biodiversity:** {env['biodiversity']}")

    locations = sim['secondary_locations']
    if locations['tsunami_coasts']:
        st.write("Tsunami-exposed coasts")
        st.dataframe(pd.DataFrame(locations['tsunami_coasts'])[
            ['name', 'country', 'distance_km', 'elevation_m', 'tsunami_risk']], height=220)

    # Export buttons
    df_all = results_to_dataframe(sim)
    stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    st.download_button("Download results CSV", data=export_results_csv(df_all),
                       file_name=f"impact_results_{stamp}.csv", mime="text/csv")
    st.download_button("Download results JSON", data=export_results_json([sim]),
                       file_name=f"impact_results_{stamp}.json", mime="application/json")

    st.success("Simulation complete — use downloads to save results.")
