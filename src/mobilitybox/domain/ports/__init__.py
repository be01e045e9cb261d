"""Ports (interfaces) for the ports-and-adapters architecture."""

from mobilitybox.domain.ports.departure_gateway import DepartureGateway

__all__ = ["DepartureGateway"]
