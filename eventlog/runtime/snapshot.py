from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventLogSnapshot(BaseModel):
    """Top-level envelope of a persisted event log. Events are decoded one by one later."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, description="Log name the snapshot was saved under.")
    creation_time: Optional[str] = Field(None, alias="creationTime", description="Log creation timestamp.")
    export_time: Optional[str] = Field(None, alias="exportTime", description="Timestamp of the export.")
    events: List[Any] = Field(default_factory=list, description="Raw event dictionaries in append order.")

    @field_validator("name", "creation_time", "export_time", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("events", mode="before")
    @classmethod
    def _list_or_empty(cls, value: Any) -> List[Any]:
        return value if isinstance(value, list) else []


__all__ = ["EventLogSnapshot"]
