from tests.mocks.models import (
    FailingSaveModel,
    MockModel,
    SyncSaveModel,
    UnsavableModel,
    User,
)

__all__ = [
    "FailingSaveModel",
    "MockModel",
    "SyncSaveModel",
    "UnsavableModel",
    "User",
]
