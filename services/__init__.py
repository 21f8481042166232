"""
services - Business-logic layer sitting between API and DB.
"""

from services.setup_service import SetupService       # noqa: F401
