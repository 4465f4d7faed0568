from dataclasses import dataclass
from datetime import datetime


# fmt: off
@dataclass(frozen=True)
class ShareLinkModel:
    target: str                         # Original long URL
    token: str                          # Unique short identifier of the share link
    expires_at: datetime | None = None  # TTL as Python datetime, after which this record is expired
# fmt: on
