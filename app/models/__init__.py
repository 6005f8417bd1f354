# Import all models to ensure they are registered with SQLAlchemy

# 键值存储
from app.models.storage import KeyValueEntry

__all__ = [
    "KeyValueEntry",
]
