"""Best-effort activity history recording"""

from typing import Any, Dict, Optional

from database.entities import HistoryData
from database.repository import StorageRepository
from core.logging import logger


def record_history(
    storage: StorageRepository,
    user_id: str,
    action: str,
    details: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None
) -> bool:
    """
    Append an entry to the user's activity history

    History is an audit trail, not part of the caller's operation: a failed
    write is logged and reported through the return value only.

    Returns:
        bool: True if the entry was stored
    """
    try:
        storage.add_to_history(user_id, HistoryData(action=action, details=details, metadata=metadata))
        return True
    except Exception as e:
        logger.warning(f"⚠️ History write failed (user={user_id}, action={action!r}): {str(e)}")
        return False
