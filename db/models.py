"""
db.models - SQLAlchemy ORM declarations.

Tables
------
warehouses - physical sites.  The importer lazily creates one default
             warehouse when the store is empty.
sectors    - named areas of a warehouse.  Looked up by exact name.
zones      - drawable rectangles inside a sector on a given floor.
             Never written by the importer.
products   - one row per imported line.  SKU is indexed but NOT unique;
             duplicate SKUs within a file only raise a warning.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, Float, DateTime, Text, ForeignKey, Index,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime | None) -> str:
    return value.isoformat() if value else ""


class Base(DeclarativeBase):
    pass


class Warehouse(Base):
    __tablename__ = "warehouses"

    id     = Column(Integer, primary_key=True, autoincrement=True)
    name   = Column(String(200), nullable=False, index=True)
    floors = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    sectors = relationship("Sector", back_populates="warehouse",
                           cascade="all, delete-orphan")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "floors": self.floors,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


class Sector(Base):
    __tablename__ = "sectors"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    warehouse_id = Column(Integer,
                          ForeignKey("warehouses.id", ondelete="CASCADE"),
                          nullable=False, index=True)
    name         = Column(String(200), nullable=False, index=True)

    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    warehouse = relationship("Warehouse", back_populates="sectors")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "warehouse_id": self.warehouse_id,
            "name": self.name,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


class Zone(Base):
    __tablename__ = "zones"

    id        = Column(Integer, primary_key=True, autoincrement=True)
    sector_id = Column(Integer,
                       ForeignKey("sectors.id", ondelete="CASCADE"),
                       nullable=False, index=True)
    name      = Column(String(200), nullable=False, index=True)
    floor     = Column(Integer, nullable=False, default=0, index=True)

    # ── Placement on the floor plan ────────────────────────────────────
    position_x = Column(Float, nullable=False, default=0)
    position_y = Column(Float, nullable=False, default=0)
    width      = Column(Float, nullable=False, default=0)
    height     = Column(Float, nullable=False, default=0)
    color      = Column(String(32), nullable=True)

    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sector_id": self.sector_id,
            "name": self.name,
            "floor": self.floor,
            "position_x": self.position_x,
            "position_y": self.position_y,
            "width": self.width,
            "height": self.height,
            "color": self.color,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


class Product(Base):
    __tablename__ = "products"

    id       = Column(Integer, primary_key=True, autoincrement=True)
    sku      = Column(String(200), nullable=False, index=True, default="")
    name     = Column(String(500), nullable=False, default="")
    quantity = Column(Float, nullable=False, default=0)

    # ── Location ───────────────────────────────────────────────────────
    sector_id  = Column(Integer, ForeignKey("sectors.id", ondelete="SET NULL"),
                        nullable=True, index=True)
    zone_id    = Column(Integer, ForeignKey("zones.id", ondelete="SET NULL"),
                        nullable=True, index=True)
    floor      = Column(Integer, nullable=False, default=0, index=True)
    position_x = Column(Float, nullable=True)
    position_y = Column(Float, nullable=True)

    # ── Descriptive ────────────────────────────────────────────────────
    description = Column(Text, nullable=True)
    category    = Column(String(200), nullable=True, index=True)
    unit        = Column(String(32), nullable=False, default="pcs")

    # ── Timestamps ─────────────────────────────────────────────────────
    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    __table_args__ = (
        Index("ix_products_sector_floor", "sector_id", "floor"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sku": self.sku,
            "name": self.name,
            "quantity": self.quantity,
            "sector_id": self.sector_id,
            "zone_id": self.zone_id,
            "floor": self.floor,
            "position_x": self.position_x,
            "position_y": self.position_y,
            "description": self.description,
            "category": self.category,
            "unit": self.unit,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }
