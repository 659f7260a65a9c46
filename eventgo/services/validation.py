from typing import Any, Type

from eventgo.models.base import Base
from eventgo.services.exceptions import ValidationError


def check_max_length(model: Type[Base], field: str, value: Any) -> None:
    """Reject strings longer than the column allows; engines other than SQLite enforce it."""
    limit = getattr(model.__table__.c[field].type, "length", None)
    if limit is not None and isinstance(value, str) and len(value) > limit:
        raise ValidationError(f"{field} must be at most {limit} characters", field=field)
