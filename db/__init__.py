"""
db - Database layer.

Public API:
    init_db()          → create engine + tables
    get_session()      → new AsyncSession
    WarehouseStore     → persistence handle for the importer
    Warehouse, Sector, Zone, Product → ORM models
"""

from db.engine import init_db, dispose_db, get_session, get_sessionmaker   # noqa: F401
from db.models import Base, Warehouse, Sector, Zone, Product               # noqa: F401
from db.store import WarehouseStore                                        # noqa: F401
