from typing import Any, List

from pydantic import BaseModel, Field, model_validator


# =========================
# UPSTREAM ENVELOPES
# =========================
class UpstreamModel(BaseModel):
    """Upstream payloads: a null field decodes to its zero value, like a missing one."""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: item for key, item in value.items() if item is not None}
        return value


class ApiStat(UpstreamModel):
    code: int = 0
    message: str = ""
    ttl: int = 0


class RelationStat(UpstreamModel):
    mid: int = 0
    following: int = 0
    whisper: int = 0
    black: int = 0
    follower: int = 0


class RelationStatEnvelope(ApiStat):
    data: RelationStat = Field(default_factory=RelationStat)


class ViewCount(UpstreamModel):
    view: int = 0


class UpStat(UpstreamModel):
    archive: ViewCount = Field(default_factory=ViewCount)
    article: ViewCount = Field(default_factory=ViewCount)


class UpStatEnvelope(ApiStat):
    data: UpStat = Field(default_factory=UpStat)


# =========================
# DISPLAY RESPONSES
# =========================
class DisplayFrame(BaseModel):
    text: str
    icon: str


class FramesResponse(BaseModel):
    frames: List[DisplayFrame]


class ErrorResponse(BaseModel):
    err_code: int = -1
    err_msg: str
