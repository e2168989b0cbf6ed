import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app import crud
from app.schemas import CarCreate

logger = logging.getLogger(__name__)


async def seed_demo_data(db: AsyncSession):
    user = await crud.add_user(db, "John", "Doe", "john.doe@example.com", user_id=1)
    await crud.register_car(db, CarCreate(license_plate="ABC123", make="Toyota", model="Camry", owner_id=user.id))
    await crud.add_parking_spot(db, "A1", spot_id=1)
    logger.info("Seeded demo user, car and parking spot")
