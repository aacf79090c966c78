"""Exceptions raised by the lifecycle services."""

from __future__ import annotations


class NotFoundError(LookupError):
    """A pet, order or client does not exist or is not visible to the caller."""


class ProfileIncompleteError(ValueError):
    """The owner has not filled in the contact data a QR order needs."""


class AddressLockedError(ValueError):
    """The order has left ``pendiente`` so its shipping address is read-only."""


class InvalidTransitionError(ValueError):
    """An order status change is not allowed from the current status."""


class SlugAllocationError(RuntimeError):
    """No free public slug could be generated."""


class PhotoUploadError(RuntimeError):
    """A pet photo was rejected or could not be stored."""


__all__ = [
    "AddressLockedError",
    "InvalidTransitionError",
    "NotFoundError",
    "PhotoUploadError",
    "ProfileIncompleteError",
    "SlugAllocationError",
]
