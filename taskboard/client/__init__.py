from .api import ApiClient, ApiError
from .commands import OptimisticCommand
from .store import AuthStore, TaskStore

__all__ = ["ApiClient", "ApiError", "OptimisticCommand", "AuthStore", "TaskStore"]
