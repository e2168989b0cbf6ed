from sqlalchemy import Column, Integer, String, Boolean, TIMESTAMP
from app.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)

class Car(Base):
    __tablename__ = "cars"

    # Ids are assigned by the ledger, not by SQLite
    id = Column(Integer, primary_key=True, autoincrement=False)
    license_plate = Column(String(20))
    make = Column(String(50))
    model = Column(String(50))
    # Owners are not checked against users
    owner_id = Column(Integer, nullable=False)
    is_parked = Column(Boolean, default=False, nullable=False)
    parking_spot_id = Column(Integer, nullable=True)
    parking_start_time = Column(TIMESTAMP, nullable=True)
    parking_end_time = Column(TIMESTAMP, nullable=True)

class ParkingSpot(Base):
    __tablename__ = "parking_spots"

    id = Column(Integer, primary_key=True)
    spot_number = Column(String(20), nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    car_id = Column(Integer, nullable=True)
    occupied_since = Column(TIMESTAMP, nullable=True)

class ParkingSession(Base):
    __tablename__ = "parking_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    car_id = Column(Integer, nullable=False, index=True)
    parking_spot_id = Column(Integer, nullable=False)
    entry_timestamp = Column(TIMESTAMP, nullable=False)
    exit_timestamp = Column(TIMESTAMP, nullable=True)
    is_active = Column(Boolean, default=True)
