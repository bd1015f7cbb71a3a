"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import IRecordStore
from app.application.interfaces.services import (
    Clock,
    ICacheService,
    ILockProvider,
    IMutex,
    Producer,
)

__all__ = [
    "Clock",
    "ICacheService",
    "ILockProvider",
    "IMutex",
    "IRecordStore",
    "Producer",
]
