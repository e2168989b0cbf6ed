import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.errors import ConflictError, NoActiveDataError, NotFoundError
from app.models import Car, ParkingSession, ParkingSpot, User
from app.pricing import calculate_parking_cost
from app.schemas import CarCreate, ParkingHistoryEntry, ParkingSessionRead

logger = logging.getLogger(__name__)


@dataclass
class ParkingReceipt:
    car: Car
    spot: ParkingSpot
    start_time: datetime
    end_time: datetime
    total_cost: Decimal


async def add_user(db: AsyncSession, first_name: str, last_name: str, email: str, user_id: Optional[int] = None):
    user = User(id=user_id, first_name=first_name, last_name=last_name, email=email)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user

async def add_parking_spot(db: AsyncSession, spot_number: str, spot_id: Optional[int] = None):
    spot = ParkingSpot(id=spot_id, spot_number=spot_number, is_available=True)
    db.add(spot)
    await db.flush()
    await db.refresh(spot)
    return spot

async def get_car(db: AsyncSession, car_id: int) -> Car:
    car = await db.get(Car, car_id)
    if car is None:
        raise NotFoundError("Car not found.")
    return car

async def get_parking_spot(db: AsyncSession, parking_spot_id: int) -> ParkingSpot:
    spot = await db.get(ParkingSpot, parking_spot_id)
    if spot is None:
        raise NotFoundError("Parking spot not found.")
    return spot

async def next_car_id(db: AsyncSession) -> int:
    result = await db.execute(select(func.max(Car.id)))
    return (result.scalar() or 0) + 1

async def register_car(db: AsyncSession, car_in: CarCreate) -> Car:
    car = Car(
        id=await next_car_id(db),
        license_plate=car_in.license_plate,
        make=car_in.make,
        model=car_in.model,
        owner_id=car_in.owner_id,
        is_parked=False,
    )
    db.add(car)
    try:
        await db.flush()
    except IntegrityError as e:
        raise ConflictError("Failed to register the car.") from e
    await db.refresh(car)

    logger.info(f"Registered car {car.id} with plate {car.license_plate}")
    return car

async def get_active_session(db: AsyncSession, car_id: int) -> Optional[ParkingSession]:
    result = await db.execute(
        select(ParkingSession).where(
            ParkingSession.car_id == car_id,
            ParkingSession.is_active == True
        )
    )
    return result.scalars().first()

async def begin_session(db: AsyncSession, car_id: int, parking_spot_id: int, now: datetime) -> Tuple[Car, ParkingSpot]:
    car = await get_car(db, car_id)
    spot = await get_parking_spot(db, parking_spot_id)

    if not spot.is_available:
        logger.warning(f"Spot {spot.spot_number} rejected car {car_id}: already occupied")
        raise ConflictError("Parking spot is not available.")
    if car.is_parked:
        logger.warning(f"Car {car_id} rejected at spot {spot.spot_number}: already parked")
        raise ConflictError("Car is already parked.")

    spot.is_available = False
    spot.car_id = car.id
    spot.occupied_since = now

    car.is_parked = True
    car.parking_spot_id = spot.id
    car.parking_start_time = now
    car.parking_end_time = None

    db.add(ParkingSession(car_id=car.id, parking_spot_id=spot.id, entry_timestamp=now, is_active=True))
    await db.flush()

    logger.info(f"Parking started for car {car.license_plate} at spot {spot.spot_number}")
    return car, spot

async def end_session(db: AsyncSession, car_id: int, now: datetime) -> ParkingReceipt:
    car = await get_car(db, car_id)
    if not car.is_parked or car.parking_spot_id is None:
        raise ConflictError("Car is not currently parked.")

    spot = await get_parking_spot(db, car.parking_spot_id)

    start_time = car.parking_start_time or now
    total_cost = calculate_parking_cost(start_time, now)

    spot.is_available = True
    spot.car_id = None
    spot.occupied_since = None

    car.is_parked = False
    car.parking_spot_id = None
    # The start time stays so the closed session can still be queried
    car.parking_end_time = now

    session = await get_active_session(db, car.id)
    if session is not None:
        session.exit_timestamp = now
        session.is_active = False
    await db.flush()

    logger.info(f"Parking ended for car {car.license_plate} at spot {spot.spot_number}, cost {total_cost}")
    return ParkingReceipt(car=car, spot=spot, start_time=start_time, end_time=now, total_cost=total_cost)

async def get_parking_period(db: AsyncSession, car_id: int) -> Car:
    car = await get_car(db, car_id)
    if car.parking_start_time is None or car.parking_end_time is None:
        raise NoActiveDataError("No parking period found for this car.")
    return car

async def get_parking_cost(db: AsyncSession, car_id: int) -> Tuple[Car, Decimal]:
    car = await get_parking_period(db, car_id)
    return car, calculate_parking_cost(car.parking_start_time, car.parking_end_time)

async def get_user_details(db: AsyncSession, user_id: int) -> Tuple[User, List[Car], List[ParkingHistoryEntry]]:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")

    result = await db.execute(select(Car).where(Car.owner_id == user_id).order_by(Car.id))
    cars = list(result.scalars().all())

    # Each car only remembers its latest session
    history = []
    for car in cars:
        if car.parking_start_time is not None and car.parking_end_time is not None:
            total_cost = calculate_parking_cost(car.parking_start_time, car.parking_end_time)
        else:
            total_cost = Decimal("0")
        history.append(ParkingHistoryEntry(
            car_id=car.id,
            license_plate=car.license_plate,
            parking_start_time=car.parking_start_time,
            parking_end_time=car.parking_end_time,
            total_cost=total_cost,
        ))

    return user, cars, history

async def list_car_sessions(db: AsyncSession, car_id: int) -> List[ParkingSessionRead]:
    await get_car(db, car_id)

    result = await db.execute(
        select(ParkingSession)
        .where(ParkingSession.car_id == car_id)
        .order_by(ParkingSession.id)
    )

    sessions = []
    for session in result.scalars().all():
        if session.exit_timestamp is not None:
            total_cost = calculate_parking_cost(session.entry_timestamp, session.exit_timestamp)
        else:
            total_cost = Decimal("0")
        sessions.append(ParkingSessionRead(
            id=session.id,
            car_id=session.car_id,
            parking_spot_id=session.parking_spot_id,
            entry_timestamp=session.entry_timestamp,
            exit_timestamp=session.exit_timestamp,
            is_active=session.is_active,
            total_cost=total_cost,
        ))
    return sessions
