"""PetCode registry backend: QR emergency profiles and tag fulfillment."""

__version__ = "0.1.0"
