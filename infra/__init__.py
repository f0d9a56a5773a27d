"""
Infrastructure module exports.

Configuration and factory for the proving backend.
"""

from .config import ProverConfig, get_config, ProverBackendType

__all__ = [
    "ProverConfig",
    "get_config",
    "ProverBackendType",
]
