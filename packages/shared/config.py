from __future__ import annotations

from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.core.watcher.types import DEFAULT_DELAY_MS, WatchTarget


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    process_name: str
    invert_icons: bool = False
    delay_ms: int = Field(default=DEFAULT_DELAY_MS, gt=0)
    match_policy: Literal["first", "any"] = "first"
    debug: bool = False

    @field_validator("process_name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("process name must not be empty")
        return v

    @property
    def tray_title(self) -> str:
        return f"Process Watcher ({self.process_name})"

    def to_watch_target(self) -> WatchTarget:
        return WatchTarget(
            process_name=self.process_name,
            delay_ms=self.delay_ms,
            invert_icons=self.invert_icons,
            match_policy=self.match_policy,
        )
