#!/usr/bin/env python3
"""
Seed Script for the Pricing Catalog

Creates the default pricing plans and add-on services offered on quotes.
Existing rows with the same name are left untouched, so the script can be
re-run safely.

Run with: python scripts/seed_catalog.py
"""

import asyncio
from datetime import date
from decimal import Decimal
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from arqui_api.database import async_session_maker, init_db
from arqui_api.models import PricingPlan, Service


PRICING_PLANS = [
    {
        "name": "Anteproyecto",
        "description": "Distribución, volumetría y planos de anteproyecto.",
        "price_per_area": Decimal("15.00"),
        "min_days": 15,
        "max_days": 30,
    },
    {
        "name": "Proyecto de arquitectura",
        "description": "Planos de arquitectura completos para licencia de edificación.",
        "price_per_area": Decimal("25.00"),
        "min_days": 30,
        "max_days": 45,
    },
    {
        "name": "Expediente técnico completo",
        "description": "Arquitectura, estructuras e instalaciones sanitarias y eléctricas.",
        "price_per_area": Decimal("40.00"),
        "min_days": 45,
        "max_days": 75,
    },
]

SERVICES = [
    {
        "name": "Saneamiento físico legal",
        "description": "Regularización del predio ante registros públicos y municipalidad.",
        "pricing_mode": "flat",
        "price": Decimal("1500.00"),
    },
    {
        "name": "Modelado BIM",
        "description": "Modelo BIM coordinado del proyecto.",
        "pricing_mode": "per_area",
        "price": Decimal("4.50"),
        "is_addon": True,
    },
    {
        "name": "Supervisión de obra",
        "description": "Supervisión técnica durante la ejecución.",
        "pricing_mode": "percent",
        "price": Decimal("10.00"),
        "is_addon": True,
    },
    {
        "name": "Renders 3D",
        "description": "Vista fotorrealista por ambiente.",
        "pricing_mode": "flat",
        "price": Decimal("350.00"),
        "is_addon": True,
    },
    {
        "name": "Trámite de licencia de edificación",
        "description": "Gestión del expediente ante la municipalidad.",
        "pricing_mode": "flat",
        "price": Decimal("900.00"),
    },
]


async def seed_plans(session) -> int:
    existing = set((await session.execute(select(PricingPlan.name))).scalars().all())
    created = 0
    for data in PRICING_PLANS:
        if data["name"] in existing:
            print(f"  Skipping plan: {data['name']} (already exists)")
            continue
        session.add(PricingPlan(currency="PEN", effective_from=date.today(), **data))
        created += 1
        print(f"  Created plan: {data['name']} ({data['price_per_area']} PEN per m2)")
    return created


async def seed_services(session) -> int:
    existing = set((await session.execute(select(Service.name))).scalars().all())
    created = 0
    for order, data in enumerate(SERVICES, start=1):
        if data["name"] in existing:
            print(f"  Skipping service: {data['name']} (already exists)")
            continue
        session.add(Service(currency="PEN", display_order=order, **data))
        created += 1
        print(f"  Created service: {data['name']} ({data['pricing_mode']} {data['price']})")
    return created


async def main():
    """Main seed function."""
    print("="*60)
    print("Pricing Catalog - Seed Script")
    print("="*60)

    await init_db()

    async with async_session_maker() as session:
        print("\nSeeding pricing plans...")
        plans = await seed_plans(session)

        print("\nSeeding services...")
        services = await seed_services(session)

        await session.commit()

    print("\n" + "="*60)
    print(f"Created {plans} plans and {services} services")
    print("="*60)


if __name__ == "__main__":
    asyncio.run(main())
