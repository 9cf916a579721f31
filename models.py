"""
Plain data records passed between the stages of the impact pipeline.

Units are carried in field names:
    diameter_m, crater_diameter_m : meters
    velocity_km_s                 : kilometers/second
    density_kg_m3                 : kg/m^3
    angle_deg                     : degrees from horizontal (90 vertical)
    distance_km, radii_km         : kilometers
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

DAMAGE_TIERS = ("severe", "moderate", "light")


class ImpactInputError(ValueError):
    """Raised at the input boundary when impact parameters are out of range."""


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class ImpactParameters:
    diameter_m: float
    velocity_km_s: float
    density_kg_m3: float = 3000.0
    angle_deg: float = 45.0


@dataclass(frozen=True)
class City:
    name: str
    country: str
    lat: float
    lng: float
    population: int


@dataclass(frozen=True)
class AffectedCity(City):
    distance_km: float
    damage_level: str
    estimated_casualties: int
    survival_rate: float


@dataclass
class ImpactResult:
    mass_kg: float
    energy_joules: float
    energy_mt: float
    crater_diameter_m: float
    crater_depth_m: float
    radii_km: Dict[str, float]


@dataclass
class EarthquakeEffect:
    city: City
    distance_km: float
    magnitude: float
    intensity: str
    damage: str


@dataclass
class EarthquakeSummary:
    total_affected: int = 0
    total_fatalities: int = 0
    total_injuries: int = 0
    catastrophic: int = 0
    severe: int = 0
    moderate: int = 0
    light: int = 0
    none: int = 0
    breakdown: List[dict] = field(default_factory=list)


@dataclass
class CasualtyEstimate:
    zone: str
    population: int
    fatalities: int
    injuries: int
    survivors: int
    city: Optional[str] = None


@dataclass
class PopulationExposure:
    total_population: int
    casualties: List[CasualtyEstimate]
    summary: Dict[str, int]
    source: str = "none"
