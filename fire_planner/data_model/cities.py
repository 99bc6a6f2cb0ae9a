# data_model/cities.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

BASE_CITY_ID = "mumbai"


@dataclass(frozen=True)
class CityProfile:
    id: str
    name: str
    region: str
    cost_multiplier: float  # relative to the base city
    # informational only, monthly averages
    average_rent: float = 0.0
    average_utilities: float = 0.0
    average_food: float = 0.0
    average_transport: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "region": self.region,
            "costMultiplier": self.cost_multiplier,
            "averageRent": self.average_rent,
            "averageUtilities": self.average_utilities,
            "averageFood": self.average_food,
            "averageTransport": self.average_transport,
        }


CITIES: Tuple[CityProfile, ...] = (
    CityProfile("mumbai", "Mumbai", "Maharashtra", 1.0, 35000, 3500, 12000, 4000),
    CityProfile("bangalore", "Bangalore", "Karnataka", 0.85, 25000, 3000, 10000, 3500),
    CityProfile("delhi", "Delhi", "Delhi", 0.9, 28000, 3200, 11000, 3800),
    CityProfile("pune", "Pune", "Maharashtra", 0.7, 18000, 2500, 8500, 3000),
    CityProfile("goa", "Goa", "Goa", 0.6, 15000, 2200, 7500, 2500),
    CityProfile("kochi", "Kochi", "Kerala", 0.55, 12000, 2000, 7000, 2200),
    CityProfile("jaipur", "Jaipur", "Rajasthan", 0.5, 10000, 1800, 6500, 2000),
    CityProfile("bhubaneswar", "Bhubaneswar", "Odisha", 0.45, 8000, 1500, 5500, 1800),
)

_BY_ID: Dict[str, CityProfile] = {c.id: c for c in CITIES}


def get_city(city_id: str) -> CityProfile:
    try:
        return _BY_ID[str(city_id).strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown city: {city_id}") from None
