import enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.sql import func
from config.bd import Base


class RoomStatus(str, enum.Enum):
    BOOKED = "Booked"
    TEMPORARY = "Sementara"


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("outlet_id", "room_code", name="uq_rooms_outlet_code"),
        ForeignKeyConstraint(
            ["floor_id", "outlet_id"],
            ["floors.id", "floors.outlet_id"],
            ondelete="CASCADE",
            name="fk_rooms_floor_outlet",
        ),
        CheckConstraint("status IN ('Booked', 'Sementara')", name="ck_rooms_status"),
        Index("ix_rooms_floor_id", "floor_id"),
    )

    id = Column(Integer, primary_key=True)
    outlet_id = Column(Integer, ForeignKey("outlets.id", ondelete="CASCADE"), nullable=False)
    floor_id = Column(Integer, nullable=False)
    room_code = Column(String(50), nullable=False)

    x = Column(Float, nullable=False)
    y = Column(Float, nullable=False)
    width = Column(Float, nullable=False)
    height = Column(Float, nullable=False)

    status = Column(String(20), nullable=False)
    tenant_name = Column(String(200), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
