"""Traffic simulator."""

from .sim import ISim, Sim, generate_log

__all__ = ["ISim", "Sim", "generate_log"]
