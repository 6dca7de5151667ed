from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from models.base import Base


class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), unique=True, index=True, nullable=False)

    takealot_api_key = Column(String(255), nullable=True)  # always stored as "Key <token>"
    company_name = Column(String(255), nullable=True)
    trading_name = Column(String(255), nullable=True)
    registration_number = Column(String(64), nullable=True)
    address = Column(Text, nullable=True)  # multi-line

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
