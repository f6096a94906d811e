from .server_builder import ServerBuilder
from .uvicorn_builder import UvicornServerBuilder

__all__ = (
    "ServerBuilder",
    "UvicornServerBuilder",
)
