"""
IntelloTask - task assignment and tracking over a local key-value store.
"""
from intellotask.data_service import DataService

__version__ = "0.1.0"

__all__ = ["DataService", "__version__"]
