"""Line item template model for reusable suggestion presets."""

from sqlalchemy import Column, DateTime, Integer, Numeric, String, func

from backend.app.db.base_class import Base


class LineItemTemplate(Base):
    __tablename__ = "line_item_templates"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String(255), nullable=False)
    default_quantity = Column(Numeric(10, 2), nullable=True)
    default_amount = Column(Numeric(10, 2), nullable=True)
    category = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
