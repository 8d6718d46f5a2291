"""
Financial API - HTTP front-end for financial accounts on a Fabric ledger.

Exposes GET and POST on /assets and forwards them to the ReadAsset and
CreateAsset chaincode functions through the ledger gateway client.
"""

from .app import create_app
from .routes import router

__all__ = ["create_app", "router"]
