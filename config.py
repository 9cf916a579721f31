"""
Runtime settings, read from the environment (and a local .env file if present).
"""

import os

from dotenv import load_dotenv

load_dotenv()

# NASA NeoWs API. DEMO_KEY is rate limited; register at https://api.nasa.gov/
NASA_API_KEY = os.getenv("NASA_API_KEY", "DEMO_KEY")
NASA_BASE_URL = os.getenv("NASA_BASE_URL", "https://api.nasa.gov/neo/rest/v1")
NASA_TIMEOUT_S = float(os.getenv("NASA_TIMEOUT_S", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Gridded population raster; unset means the city-table estimate is used
POPULATION_RASTER_PATH = os.getenv("POPULATION_RASTER_PATH") or None
