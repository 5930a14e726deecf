"""
Base interfaces for integration providers.
The delivery interface is declared next to the other engine ports.
"""
from edupartner.engine.ports import DeliveryProvider

__all__ = ["DeliveryProvider"]
