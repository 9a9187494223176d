# backend/projectmanager/__init__.py
from .config import settings
from .database import Base, get_db
from . import models
from . import schemas

__version__ = "0.1.0"
