import uvicorn
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List
from fastapi import FastAPI, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND
from app import config
from app.database import init_db, dispose_db, get_db, session_scope
from app.errors import LedgerError, NotFoundError, ConflictError, NoActiveDataError
from app.events import announce_spot_status, SPOT_AVAILABLE, SPOT_OCCUPIED
from app.pricing import duration_hours, format_currency, round_currency
from app.schemas import (
    CarCreate,
    CarRead,
    CarRegisterResponse,
    ParkingBeginCreate,
    ParkingBeginResponse,
    ParkingExitCreate,
    ParkingExitResponse,
    ParkingPeriodResponse,
    ParkingCostResponse,
    ParkingSessionRead,
    UserDetailsResponse,
)
from app.seed import seed_demo_data
from app import crud

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    NotFoundError: HTTP_404_NOT_FOUND,
    ConflictError: HTTP_400_BAD_REQUEST,
    NoActiveDataError: HTTP_400_BAD_REQUEST,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    if config.SEED_DEMO_DATA:
        async with session_scope() as db:
            await seed_demo_data(db)
    yield
    await dispose_db()


app = FastAPI(
    title=config.APP_TITLE,
    version="1.0.0",
    root_path=config.ROOT_PATH,
    lifespan=lifespan
)


def current_time() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    status_code = ERROR_STATUS.get(type(exc), HTTP_400_BAD_REQUEST)
    logger.info(f"{request.method} {request.url.path} rejected with {status_code}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.post("/api/v1/cars/", response_model=CarRegisterResponse)
async def register_car(car_in: CarCreate, db: AsyncSession = Depends(get_db)):
    car = await crud.register_car(db, car_in)

    return CarRegisterResponse(
        message=f"Car registered successfully with ID: {car.id}.",
        car=CarRead.model_validate(car)
    )


@app.post("/api/v1/sessions/begin/", response_model=ParkingBeginResponse)
async def begin_parking(
    entry: ParkingBeginCreate,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(current_time)
):
    car, spot = await crud.begin_session(db, entry.car_id, entry.parking_spot_id, now)

    announce_spot_status(spot.spot_number, SPOT_OCCUPIED)

    return ParkingBeginResponse(
        message=f"Parking started for Car {car.license_plate} at Spot {spot.spot_number}.",
        license_plate=car.license_plate,
        spot_number=spot.spot_number,
        parking_start_time=car.parking_start_time
    )


@app.put("/api/v1/sessions/exit/", response_model=ParkingExitResponse)
async def exit_parking(
    entry: ParkingExitCreate,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(current_time)
):
    receipt = await crud.end_session(db, entry.car_id, now)
    hours = round(duration_hours(receipt.start_time, receipt.end_time), 2)

    announce_spot_status(receipt.spot.spot_number, SPOT_AVAILABLE)

    return ParkingExitResponse(
        message=(
            f"Parking ended for Car {receipt.car.license_plate}. "
            f"Duration: {hours:.2f} hours. Total Cost: {format_currency(receipt.total_cost)}."
        ),
        license_plate=receipt.car.license_plate,
        parking_start_time=receipt.start_time,
        parking_end_time=receipt.end_time,
        duration_hours=hours,
        total_cost=round_currency(receipt.total_cost),
        formatted_cost=format_currency(receipt.total_cost)
    )


@app.get("/api/v1/cars/{car_id}/parking-period", response_model=ParkingPeriodResponse)
async def get_parking_period(car_id: int, db: AsyncSession = Depends(get_db)):
    car = await crud.get_parking_period(db, car_id)

    return ParkingPeriodResponse(
        car_id=car.id,
        license_plate=car.license_plate,
        start_time=car.parking_start_time,
        end_time=car.parking_end_time,
        duration_hours=duration_hours(car.parking_start_time, car.parking_end_time)
    )


@app.get("/api/v1/cars/{car_id}/parking-cost", response_model=ParkingCostResponse)
async def get_parking_cost(car_id: int, db: AsyncSession = Depends(get_db)):
    car, total_cost = await crud.get_parking_cost(db, car_id)

    return ParkingCostResponse(
        car_id=car.id,
        license_plate=car.license_plate,
        start_time=car.parking_start_time,
        end_time=car.parking_end_time,
        total_cost=round_currency(total_cost),
        formatted_cost=format_currency(total_cost)
    )


@app.get("/api/v1/cars/{car_id}/sessions", response_model=List[ParkingSessionRead])
async def list_car_sessions(car_id: int, db: AsyncSession = Depends(get_db)):
    sessions = await crud.list_car_sessions(db, car_id)
    for session in sessions:
        session.total_cost = round_currency(session.total_cost)
    return sessions


@app.get("/api/v1/users/{user_id}", response_model=UserDetailsResponse)
async def get_user_details(user_id: int, db: AsyncSession = Depends(get_db)):
    user, cars, history = await crud.get_user_details(db, user_id)
    for entry in history:
        entry.total_cost = round_currency(entry.total_cost)

    return UserDetailsResponse(
        user_id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        cars=[CarRead.model_validate(car) for car in cars],
        parking_history=history
    )


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=config.HOST, port=config.PORT, reload=True)
