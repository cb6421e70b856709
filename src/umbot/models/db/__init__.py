from .query_data import QueryData
from .file_storage import FileStorage
from .mongo_storage import MongoStorage
from .model import Model

__all__ = [
    'QueryData',
    'FileStorage',
    'MongoStorage',
    'Model',
]
