#!/usr/bin/env python3
"""
Seed the database with sample Seattle listings.

Usage:
    python -m student_housing.seed           # replace existing listings
    python -m student_housing.seed --reset   # drop and recreate every table first
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from student_housing.config import settings
from student_housing.database import AsyncSessionLocal, create_tables, drop_tables, engine
from student_housing.models.image import PropertyImage
from student_housing.models.property import Property, PropertyType
from student_housing.repositories.property import PropertyRepository

logger = logging.getLogger(__name__)


SAMPLE_PROPERTIES: List[Dict[str, Any]] = [
    {
        "price": 599000,
        "bedrooms": 3,
        "bathrooms": 2,
        "sqft": 2100,
        "address": "4557 15th Ave NE, Seattle, WA 98105",
        "description": "Beautiful modern home with updated kitchen, hardwood floors, and spacious backyard. "
                       "Walking distance to UW campus.",
        "type": PropertyType.SALE,
        "near_university": "University of Washington",
        "latitude": 47.661475,
        "longitude": -122.312543,
        "images": [
            "https://example.com/house1a.jpg",
            "https://example.com/house1b.jpg",
            "https://example.com/house1c.jpg",
        ],
    },
    {
        "price": 2500,
        "bedrooms": 2,
        "bathrooms": 1,
        "sqft": 900,
        "address": "1100 12th Ave, Seattle, WA 98122",
        "description": "Modern apartment with city views, in-unit laundry, and secure parking. "
                       "5-minute walk to Seattle University.",
        "type": PropertyType.RENT,
        "near_university": "Seattle University",
        "images": [
            "https://example.com/apt1a.jpg",
            "https://example.com/apt1b.jpg",
        ],
    },
    {
        "price": 450000,
        "bedrooms": 4,
        "bathrooms": 3,
        "sqft": 2800,
        "address": "3469 3rd Ave W, Seattle, WA 98119",
        "description": "Spacious family home near SPU campus. Features updated kitchen, large basement, "
                       "and mountain views.",
        "type": PropertyType.SALE,
        "near_university": "Seattle Pacific University",
        "images": [
            "https://example.com/house2a.jpg",
            "https://example.com/house2b.jpg",
        ],
    },
    {
        "price": 1800,
        "bedrooms": 1,
        "bathrooms": 1,
        "sqft": 800,
        "address": "4700 Brooklyn Ave NE, Seattle, WA 98105",
        "description": "Cozy studio in the heart of the U-District. Includes parking and utilities.",
        "type": PropertyType.RENT,
        "near_university": "University of Washington",
        "images": [
            "https://example.com/studio1a.jpg",
            "https://example.com/studio1b.jpg",
        ],
    },
    {
        "price": 3200,
        "bedrooms": 3,
        "bathrooms": 2,
        "sqft": 1500,
        "address": "1111 E Cherry St, Seattle, WA 98122",
        "description": "Newly renovated townhouse with rooftop deck. Perfect for students sharing.",
        "type": PropertyType.RENT,
        "near_university": "Seattle University",
        "images": [
            "https://example.com/town1a.jpg",
            "https://example.com/town1b.jpg",
        ],
    },
    {
        "price": 725000,
        "bedrooms": 3,
        "bathrooms": 2.5,
        "sqft": 2400,
        "address": "3213 W McGraw St, Seattle, WA 98199",
        "description": "Charming craftsman near SPU with finished basement and large yard.",
        "type": PropertyType.SALE,
        "near_university": "Seattle Pacific University",
        "images": [
            "https://example.com/house3a.jpg",
            "https://example.com/house3b.jpg",
        ],
    },
    {
        "price": 2100,
        "bedrooms": 2,
        "bathrooms": 1,
        "sqft": 950,
        "address": "4545 15th Ave NE, Seattle, WA 98105",
        "description": "Updated apartment with balcony and secure entry. All utilities included.",
        "type": PropertyType.RENT,
        "near_university": "University of Washington",
        "images": [
            "https://example.com/apt2a.jpg",
            "https://example.com/apt2b.jpg",
        ],
    },
    {
        "price": 899000,
        "bedrooms": 5,
        "bathrooms": 3,
        "sqft": 3200,
        "address": "901 12th Ave, Seattle, WA 98122",
        "description": "Historic home converted to student housing. Great investment opportunity.",
        "type": PropertyType.SALE,
        "near_university": "Seattle University",
        "images": [
            "https://example.com/house4a.jpg",
            "https://example.com/house4b.jpg",
        ],
    },
]


async def reset_schema(target_engine: AsyncEngine = engine) -> None:
    """Drop and recreate all tables."""
    logger.warning("Resetting database - all data will be lost!")
    await drop_tables(target_engine)
    await create_tables(target_engine)


async def seed_database(session_factory: async_sessionmaker = AsyncSessionLocal) -> int:
    """
    Replace all listings with the sample listings.

    Returns:
        Number of listings created
    """
    async with session_factory() as session:
        try:
            await session.execute(delete(PropertyImage))
            await session.execute(delete(Property))
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Failed to clear existing listings: {e}")
            raise

        repo = PropertyRepository(session, earth_radius=settings.earth_radius_miles)
        for sample in SAMPLE_PROPERTIES:
            data = dict(sample)
            images = data.pop("images")
            await repo.create_property_with_images(data, images)

    logger.info(f"Seeded {len(SAMPLE_PROPERTIES)} sample listings")
    return len(SAMPLE_PROPERTIES)


async def run(reset: bool) -> None:
    if reset:
        await reset_schema()
    else:
        await create_tables()

    await seed_database()
    await engine.dispose()


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Seed the database with sample listings")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables before seeding")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        asyncio.run(run(reset=args.reset))
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
