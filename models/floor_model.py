from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import func
from config.bd import Base

class Floor(Base):
    __tablename__ = "floors"
    __table_args__ = (
        UniqueConstraint("outlet_id", "level", name="uq_floors_outlet_level"),
        # Target of the composite key on rooms, keeps a room on its own outlet's floor
        UniqueConstraint("id", "outlet_id", name="uq_floors_id_outlet"),
    )

    id = Column(Integer, primary_key=True)
    outlet_id = Column(Integer, ForeignKey("outlets.id", ondelete="CASCADE"), nullable=False)
    level = Column(Integer, nullable=False)
    name = Column(String(200), nullable=False)
    image_url = Column(Text, nullable=False, default="", server_default="")
    view_box = Column(String(100), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
