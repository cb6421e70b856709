from .db import FileStorage, Model, MongoStorage, QueryData
from .users_data import UsersData
from .image_tokens import ImageTokens
from .sound_tokens import SoundTokens

__all__ = [
    'FileStorage',
    'Model',
    'MongoStorage',
    'QueryData',
    'UsersData',
    'ImageTokens',
    'SoundTokens',
]
