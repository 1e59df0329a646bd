"""Database models."""
from datetime import datetime
from sqlalchemy import Boolean, Column, Integer, String, DateTime, Float, ForeignKey, Text, JSON
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Order(Base):
    """Submitted order with the totals charged."""

    __tablename__ = "orders"

    id = Column(String, primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    staff_id = Column(String, nullable=False)
    status = Column(String, default="queued", nullable=False)  # queued, synced
    order_type = Column(String, default="pickup", nullable=False)  # pickup, delivery
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)
    delivery_address = Column(Text, nullable=True)
    subtotal = Column(Float, nullable=False)
    discount = Column(Float, nullable=False)
    total = Column(Float, nullable=False)
    manual_discount = Column(JSON, nullable=True)
    auto_deals_enabled = Column(Boolean, default=True, nullable=False)
    applied_deals = Column(JSON, nullable=True)  # List of {rule_name, times_applied, amount_saved}

    # Relationships
    lines = relationship(
        "OrderLine",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLine.position",
    )


class OrderLine(Base):
    """Snapshot of one cart line at submission time."""

    __tablename__ = "order_lines"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String, ForeignKey("orders.id"), nullable=False)
    position = Column(Integer, nullable=False)
    menu_item_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    category_id = Column(String, nullable=False)
    quantity = Column(Integer, default=1, nullable=False)
    selected_size = Column(String, nullable=True)
    total_price = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)
    snapshot = Column(JSON, nullable=False)  # Full cart line as submitted

    # Relationships
    order = relationship("Order", back_populates="lines")
