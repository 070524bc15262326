from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import pytz

from visiontrack.domain.geo_types import EPOCH_SENTINEL


def ensure_utc(dt: Optional[datetime], local_timezone: str = "UTC") -> datetime:
    """
    Ramène un horodatage en UTC.

    Un horodatage naïf est interprété dans `local_timezone`; un horodatage
    absent devient EPOCH_SENTINEL.
    """
    if dt is None:
        return EPOCH_SENTINEL
    if dt.tzinfo is None:
        local_tz = pytz.timezone(local_timezone)
        dt = local_tz.localize(dt)
    return dt.astimezone(timezone.utc)
