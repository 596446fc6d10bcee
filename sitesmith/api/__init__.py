from .generate import get_gateway
from .generate import router as generate_router

__all__ = ["generate_router", "get_gateway"]
