"""Protocol interfaces for the chain adapter."""
from .chain import NodeClient

__all__ = ["NodeClient"]
