"""
Data layer: pydantic models and the MongoDB connection used for documents.
"""

from .database import DatabaseManager, build_mongo_uri

__all__ = [
    "DatabaseManager",
    "build_mongo_uri",
]
