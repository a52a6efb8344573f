"""
Miscellaneous helper functions.
"""

from datetime import date, datetime, time
from typing import Optional

from bson import ObjectId


def get_owned(model, doc_id, user):
    """Fetch a tenant-scoped document by ID, or None when missing or foreign."""
    if not ObjectId.is_valid(doc_id):
        return None
    return model.objects(id=doc_id, user_id=user.id).first()


def to_datetime(value: Optional[date]) -> Optional[datetime]:
    """Promote a request date to a midnight datetime for storage."""
    if value is None:
        return None
    return datetime.combine(value, time.min)
