"""
Redis Audit
Sample random keys and group them by shape to report memory, expiry and idle time
"""

from .errors import (
    AuditError,
    EmptyKeyspaceError,
    MalformedMetadataError,
    StoreConnectionError,
    UsageError,
    VanishedKeyError,
)
from .report import render
from .sampler import AuditResult, run_audit
from .shapes import normalize
from .stats import KeyObservation, SampledKeyStats

__version__ = "0.1.0"

__all__ = [
    "AuditError",
    "AuditResult",
    "EmptyKeyspaceError",
    "KeyObservation",
    "MalformedMetadataError",
    "SampledKeyStats",
    "StoreConnectionError",
    "UsageError",
    "VanishedKeyError",
    "normalize",
    "render",
    "run_audit",
]
