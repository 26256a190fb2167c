from .registry import Screen, SCREENS
from .routes import screens_router

__all__ = ["Screen", "SCREENS", "screens_router"]
