"""
GeoGuessr HTTP access.

Feed and game record transport, plus the connectivity pre-flight.
"""

from .client import ClientConfig, GeoGuessrClient
from .network import check_network

__all__ = [
    "ClientConfig",
    "GeoGuessrClient",
    "check_network",
]
