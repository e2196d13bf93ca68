# main.py
import argparse
import asyncio
import logging
from dealership.config import Config, setup_logging
from dealership.database import create_database
from dealership.database.seeds import seed_cars
from dealership.server import DealershipServer


async def seed():
    db = create_database(Config)
    await db.connect()
    try:
        await seed_cars(db)
    finally:
        await db.close()


async def serve():
    server = DealershipServer()
    await server.start()
    try:
        await asyncio.Event().wait()
    finally:
        await server.stop()


async def main(args):
    # Setup logging
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        Config.validate()
        if args.seed:
            logger.info("Seeding database...")
            await seed()
            return

        logger.info("Starting server...")
        await serve()
    except Exception as e:
        logger.error(f"Error starting server: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Car dealership backend")
    parser.add_argument("--seed", action="store_true", help="load sample categories and cars, then exit")
    asyncio.run(main(parser.parse_args()))
