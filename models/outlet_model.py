from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func
from config.bd import Base

class Outlet(Base):
    __tablename__ = "outlets"

    id = Column(Integer, primary_key=True)
    slug = Column(String(120), nullable=False, unique=True)
    name = Column(String(200), nullable=False)
    company_name = Column(String(200), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
