"""Author / committer model."""

from datetime import datetime, timezone

from pydantic import BaseModel, field_validator


class Contributor(BaseModel):
    """Name and timestamp of a commit author or committer."""

    name: str
    date: datetime

    model_config = {"frozen": True}

    @field_validator("date")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are taken to be UTC already.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
