# dealership/database/seeds.py
"""Sample data for a fresh dealership: a seed manager, categories and cars"""
import asyncio
import logging
from decimal import Decimal
from ..errors import ConflictError
from ..utils.security import hash_password

logger = logging.getLogger(__name__)

SEED_MANAGER = {
    'name': 'Seed Manager',
    'email': 'manager@seeddata.com',
    'password': 'password123',
}

CATEGORIES = [
    ('Sedan', 'A passenger car in a three-box configuration'),
    ('SUV', 'Sport Utility Vehicle with increased ground clearance'),
    ('Hatchback', 'Car with a rear door that opens upwards'),
    ('Truck', 'Vehicle designed to transport cargo'),
    ('Sports Car', 'High-performance vehicle designed for speed'),
    ('Van', 'Vehicle used for transporting goods or people'),
]

# brand, model, year, price, category, mileage, transmission, fuel, engine, color, vin, condition, quantity
CARS = [
    ('Toyota', 'Camry', 2015, 35000, 'Sedan', 0, 'automatic', 'hybrid', '2.5', 'Silver', 'ABC123456789XYZ001', 'new', 3),
    ('Toyota', 'Camry', 2016, 38000, 'Sedan', 15000, 'automatic', 'hybrid', '2.5', 'Black', 'ABC123456789XYZ101', 'used', 2),
    ('Honda', 'CR-V', 2020, 38000, 'SUV', 0, 'automatic', 'petrol', '1.5', 'Blue', 'ABC123456789XYZ002', 'new', 2),
    ('Tesla', 'Model 3', 2024, 45000, 'Sedan', 0, 'automatic', 'electric', '0', 'Red', 'ABC123456789XYZ003', 'new', 5),
    ('Ford', 'F-150', 2012, 55000, 'Truck', 100, 'automatic', 'petrol', '5.0', 'Black', 'ABC123456789XYZ004', 'used', 1),
    ('BMW', 'M3', 2025, 75000, 'Sports Car', 0, 'automatic', 'petrol', '3.0', 'White', 'ABC123456789XYZ005', 'new', 2),
    ('Volkswagen', 'Golf', 2018, 32000, 'Hatchback', 0, 'manual', 'petrol', '2.0', 'Green', 'ABC123456789XYZ006', 'new', 4),
    ('Mercedes-Benz', 'Sprinter', 2010, 45000, 'Van', 500, 'automatic', 'diesel', '2.0', 'Silver', 'ABC123456789XYZ007', 'used', 2),
    ('Porsche', '911', 2022, 120000, 'Sports Car', 0, 'automatic', 'petrol', '3.0', 'Yellow', 'ABC123456789XYZ008', 'new', 1),
    ('Hyundai', 'Tucson', 2008, 35000, 'SUV', 0, 'automatic', 'hybrid', '1.6', 'Gray', 'ABC123456789XYZ009', 'new', 3),
    ('Audi', 'A4', 2016, 48000, 'Sedan', 1000, 'automatic', 'petrol', '2.0', 'Blue', 'ABC123456789XYZ010', 'used', 2),
    ('Chevrolet', 'Silverado', 2019, 52000, 'Truck', 0, 'automatic', 'petrol', '5.3', 'Red', 'ABC123456789XYZ011', 'new', 2),
    ('Mazda', '3', 2021, 28000, 'Hatchback', 0, 'automatic', 'petrol', '2.0', 'Soul Red Crystal', 'ABC123456789XYZ012', 'new', 4),
    ('Kia', 'EV6', 2025, 45000, 'SUV', 0, 'automatic', 'electric', '0', 'Glacier White', 'ABC123456789XYZ014', 'new', 3),
    ('Ford', 'Mustang', 2017, 65000, 'Sports Car', 0, 'manual', 'petrol', '5.0', 'Race Red', 'ABC123456789XYZ015', 'new', 2),
]

CAR_FIELDS = (
    'brand', 'model_name', 'year', 'price', 'category', 'mileage', 'transmission',
    'fuel_type', 'engine_size', 'color', 'vin', 'condition', 'quantity'
)


async def get_or_create_manager(db) -> int:
    managers, _ = await db.managers.list(1, 1)
    if managers:
        manager = managers[0]
        logger.info(f"Using existing manager {manager.email}")
        return manager.manager_id

    password_hash = await asyncio.to_thread(hash_password, SEED_MANAGER['password'])
    manager = await db.managers.create({
        'name': SEED_MANAGER['name'],
        'email': SEED_MANAGER['email'],
        'password_hash': password_hash,
    })
    logger.info(f"Created seed manager {manager.email}")
    return manager.manager_id


async def seed_categories(db) -> dict:
    """Create missing categories and return {name: category_id}"""
    existing = {category.name: category.category_id
                for category in await db.categories.list(active_only=False)}

    for name, description in CATEGORIES:
        if name not in existing:
            category = await db.categories.create({'name': name, 'description': description})
            existing[name] = category.category_id

    return existing


async def seed_cars(db) -> int:
    """Seed everything; cars whose VIN is already listed are skipped"""
    manager_id = await get_or_create_manager(db)
    category_ids = await seed_categories(db)

    created = 0
    for row in CARS:
        values = dict(zip(CAR_FIELDS, row))
        values['category_id'] = category_ids[values.pop('category')]
        values['price'] = Decimal(values['price'])
        values['engine_size'] = Decimal(values['engine_size'])

        try:
            await db.cars.create({**values, 'manager_id': manager_id, 'available': True})
        except ConflictError:
            logger.info(f"Car {values['vin']} already seeded")
            continue
        created += 1

    logger.info(f"Seeded {created} cars")
    return created
