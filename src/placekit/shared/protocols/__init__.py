"""Protocol interfaces shared between the core and services layers."""

from .grid import GridAdapterProtocol
from .services import LookupClientProtocol, PagedCollection

__all__ = ["GridAdapterProtocol", "LookupClientProtocol", "PagedCollection"]
