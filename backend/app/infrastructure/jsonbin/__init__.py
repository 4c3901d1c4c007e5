"""JSONBin infrastructure package."""

from .jsonbin_client import JsonBinClient

__all__ = ["JsonBinClient"]
