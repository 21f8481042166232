"""
db.store - Persistence handle used by the import pipeline.

A WarehouseStore wraps one AsyncSession.  Nothing is committed until
the caller says so, which lets the importer run a whole import as a
single transaction.  Session lifetime is the caller's responsibility.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Product, Sector, Warehouse, Zone


class WarehouseStore:

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    # ── Warehouses ─────────────────────────────────────────────────────

    async def first_warehouse(self) -> Warehouse | None:
        stmt = select(Warehouse).order_by(Warehouse.id).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_warehouse(self, warehouse: Warehouse) -> Warehouse:
        self._session.add(warehouse)
        await self._session.flush()
        return warehouse

    # ── Sectors ────────────────────────────────────────────────────────

    async def find_sector(self, name: str) -> Sector | None:
        """First sector whose name equals *name* exactly."""
        stmt = (
            select(Sector)
            .where(Sector.name == name)
            .order_by(Sector.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_sector(self, sector: Sector) -> Sector:
        self._session.add(sector)
        await self._session.flush()
        return sector

    async def count_sectors(self) -> int:
        result = await self._session.execute(select(func.count(Sector.id)))
        return result.scalar_one()

    # ── Products ───────────────────────────────────────────────────────

    async def bulk_add_products(self, products: Sequence[Product]) -> int:
        """Stage every product in one flush and return how many were added."""
        self._session.add_all(products)
        await self._session.flush()
        return len(products)

    async def count_products(self) -> int:
        result = await self._session.execute(select(func.count(Product.id)))
        return result.scalar_one()

    async def list_products(self, limit: int, offset: int = 0) -> list[Product]:
        stmt = select(Product).order_by(Product.id).limit(limit).offset(offset)
        result = await self._session.execute(stmt)
        return list(result.scalars())

    # ── Maintenance ────────────────────────────────────────────────────

    async def clear_all(self) -> None:
        """Delete every product, zone, sector and warehouse (children first)."""
        for model in (Product, Zone, Sector, Warehouse):
            await self._session.execute(delete(model))

    # ── Transaction control ────────────────────────────────────────────

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
