from app.database.async_db import get_async_db

__all__ = ["get_async_db"]
