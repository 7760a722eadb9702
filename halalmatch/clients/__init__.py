"""Clients for external API interactions."""
from halalmatch.clients.register_client import RegisterClient

__all__ = ["RegisterClient"]
