"""
Placekit Constants Module

This module provides centralized constants for placekit. Protocol constants
of the identifier format, network quotas and defaults are defined here so
there is a single source of truth.
"""

from .cli import CLICommands, CLIDefaults, CLIHelp
from .codec import PlacekeyFormat, ShorteningConfig, ValidationPatterns
from .http_codes import HTTPStatusCodes
from .network import NetworkConfig, QueryConfig, RateLimitConfig
from .spatial import GeoConstants, PolyfillConfig, ProximityConfig
from .system import BASE_SECOND, Application, BatchDefaults, CacheDefaults, FileSystem, Logging

__all__ = [
    "BASE_SECOND",
    "Application",
    "BatchDefaults",
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CacheDefaults",
    "FileSystem",
    "GeoConstants",
    "HTTPStatusCodes",
    "Logging",
    "NetworkConfig",
    "PlacekeyFormat",
    "PolyfillConfig",
    "ProximityConfig",
    "QueryConfig",
    "RateLimitConfig",
    "ShorteningConfig",
    "ValidationPatterns",
]
