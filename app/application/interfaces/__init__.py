"""Application interfaces (ports): store and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import IUserStore
from app.application.interfaces.services import (
    ICacheService,
    IMetricsRecorder,
    IPasswordHasher,
)

__all__ = [
    "ICacheService",
    "IMetricsRecorder",
    "IPasswordHasher",
    "IUserStore",
]
