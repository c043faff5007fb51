from .db import get_db, get_current_user, get_optional_user
from .lifespan import sync_taxonomies

__all__ = ["get_db", "get_current_user", "get_optional_user", "sync_taxonomies"]
