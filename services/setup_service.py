"""
services.setup_service - First-run detection and full reset.

Session management is the caller's responsibility; reset() commits
through the store it is given.
"""

from __future__ import annotations

import logging

from db.store import WarehouseStore

logger = logging.getLogger(__name__)


class SetupService:

    @staticmethod
    async def is_setup_required(store: WarehouseStore) -> bool:
        """True until the first successful import has stored any product."""
        return await store.count_products() == 0

    @staticmethod
    async def reset(store: WarehouseStore) -> None:
        """Wipe products, zones, sectors and warehouses."""
        try:
            await store.clear_all()
            await store.commit()
        except Exception:
            await store.rollback()
            raise
        logger.warning("All warehouse data cleared")
