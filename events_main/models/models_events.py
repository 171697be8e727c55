from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

Base = declarative_base()

class SlotRow(Base):
    __tablename__ = "kv_slots"
    name = Column(String, primary_key=True)     # slot key, e.g. 'events'
    value = Column(Text, nullable=False)        # raw serialized payload
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())
