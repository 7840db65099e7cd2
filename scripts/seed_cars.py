#!/usr/bin/env python3
"""
Seed the cars table with deterministic random data.

Features:
- Deterministic: fixed seed → same names, prices and ids every run
- Idempotent: safe to run multiple times (clears before seeding)
- Goes through CarService, so every seeded car passes payload validation

Usage:
    DATABASE_URL=postgresql+psycopg://... python scripts/seed_cars.py
"""

from __future__ import annotations

import random
import sys
import uuid
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import delete

from car_registry.adapters.postgres_car_store import PostgresCarStore
from car_registry.adapters.system_clock import SystemClock
from car_registry.domain.car import CarPayload
from car_registry.infra.db.models.car import CarRow
from car_registry.infra.db.session import get_session
from car_registry.ports.id_generator import IdGenerator
from car_registry.use_cases.car_service import CarService


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_CARS = 50
SEED_OWNERS = ["dealer-north", "dealer-south", "private-seller"]


# ==============================================================================
# Catalog Data
# ==============================================================================

# company -> [(model, cubic capacity cc, top speed km/h, base price)]
MODELS_BY_COMPANY = {
    "Tesla": [("Model 3", 0, 225, 42000), ("Model X", 0, 250, 80000), ("Model S", 0, 250, 75000)],
    "Toyota": [("Corolla", 1800, 180, 22000), ("Camry", 2500, 210, 28000), ("Supra", 2998, 250, 52000)],
    "Honda": [("Civic", 1500, 200, 24000), ("Accord", 1500, 210, 29000)],
    "BMW": [("M3", 2993, 290, 74000), ("X5", 2998, 243, 65000)],
    "Porsche": [("911 Carrera", 2981, 293, 110000), ("Taycan", 0, 230, 90000)],
    "Ford": [("Mustang", 5038, 250, 45000), ("Focus", 1000, 190, 20000)],
}


class SeededIdGenerator(IdGenerator):
    """UUID-shaped ids drawn from the seeded RNG."""

    def new_id(self) -> str:
        return str(uuid.UUID(int=random.getrandbits(128), version=4))


def generate_payload(index: int) -> CarPayload:
    """Generate a single car payload with +/-10% price variance."""
    company = random.choice(list(MODELS_BY_COMPANY))
    model, cubic_capacity, top_speed, base_price = random.choice(MODELS_BY_COMPANY[company])

    variance = Decimal(random.randint(90, 110)) / Decimal(100)
    price = (Decimal(base_price) * variance).quantize(Decimal("1"))

    return CarPayload(
        name=f"{company} {model} #{index:03d}",
        model=model,
        company_name=company,
        image=f"https://images.example.com/{company.lower()}/{model.lower().replace(' ', '-')}.png",
        cubic_capacity_of_engine=cubic_capacity,
        price=price,
        top_speed=top_speed,
    )


def seed_cars(num_cars: int = NUM_CARS, seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with random car data.

    Args:
        num_cars: Number of cars to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)

    print(f"🌱 Seeding database with {num_cars} cars (seed={seed})...")

    with get_session() as session:
        print("🗑️  Clearing existing cars...")
        deleted_count = session.execute(delete(CarRow)).rowcount
        print(f"   Deleted {deleted_count} existing cars")

        service = CarService(
            store=PostgresCarStore(session=session),
            clock=SystemClock(),
            id_generator=SeededIdGenerator(),
        )

        print(f"🚗 Generating {num_cars} cars...")
        cars = [
            service.create_car(generate_payload(i), caller=random.choice(SEED_OWNERS))
            for i in range(1, num_cars + 1)
        ]

        print(f"✅ Successfully seeded {len(cars)} cars!")

        print("\n📊 Sample cars:")
        for i, car in enumerate(cars[:5], 1):
            print(f"   {i}. {car.name} - ${car.price:,.2f} (owner: {car.owner})")

        if len(cars) > 5:
            print(f"   ... and {len(cars) - 5} more")


if __name__ == "__main__":
    try:
        seed_cars()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
