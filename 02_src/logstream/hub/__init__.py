"""Subscription hub module."""

from .hub import Hub, IHub, Subscription

__all__ = ["Hub", "IHub", "Subscription"]
