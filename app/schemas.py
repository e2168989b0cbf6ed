from pydantic import BaseModel, ConfigDict
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

class CarCreate(BaseModel):
    license_plate: str
    make: str
    model: str
    owner_id: int

class CarRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    license_plate: Optional[str]
    make: Optional[str]
    model: Optional[str]
    owner_id: int
    is_parked: bool
    parking_spot_id: Optional[int]
    parking_start_time: Optional[datetime]
    parking_end_time: Optional[datetime]

class CarRegisterResponse(BaseModel):
    message: str
    car: CarRead

class ParkingBeginCreate(BaseModel):
    car_id: int
    parking_spot_id: int

class ParkingBeginResponse(BaseModel):
    message: str
    license_plate: Optional[str]
    spot_number: str
    parking_start_time: datetime

class ParkingExitCreate(BaseModel):
    car_id: int

class ParkingExitResponse(BaseModel):
    message: str
    license_plate: Optional[str]
    parking_start_time: datetime
    parking_end_time: datetime
    duration_hours: float
    total_cost: Decimal
    formatted_cost: str

class ParkingPeriodResponse(BaseModel):
    car_id: int
    license_plate: Optional[str]
    start_time: datetime
    end_time: datetime
    duration_hours: float

class ParkingCostResponse(BaseModel):
    car_id: int
    license_plate: Optional[str]
    start_time: datetime
    end_time: datetime
    total_cost: Decimal
    formatted_cost: str

class ParkingHistoryEntry(BaseModel):
    car_id: int
    license_plate: Optional[str]
    parking_start_time: Optional[datetime]
    parking_end_time: Optional[datetime]
    total_cost: Decimal

class UserDetailsResponse(BaseModel):
    user_id: int
    first_name: str
    last_name: str
    email: str
    cars: List[CarRead]
    parking_history: List[ParkingHistoryEntry]

class ParkingSessionRead(BaseModel):
    id: int
    car_id: int
    parking_spot_id: int
    entry_timestamp: datetime
    exit_timestamp: Optional[datetime]
    is_active: bool
    total_cost: Decimal
