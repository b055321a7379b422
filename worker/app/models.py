# worker/app/models.py
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from worker.app.config import settings


def _default_length() -> int:
    return int(settings.DEFAULT_LIST_LENGTH)


class SamplingConfig(BaseModel):
    """Immutable per-invocation sampling options."""

    model_config = ConfigDict(frozen=True)

    max_array_length: int = Field(default_factory=_default_length, ge=1)
    apply_limit: bool = True
    decode_escapes: bool = False


class Notice(BaseModel):
    message: str
    severity: Literal["error", "warning", "info"] = "error"
    source: str


class SampleRequest(BaseModel):
    json_text: str
    list_length: Optional[int] = Field(default=None, ge=1)
    apply_limit: bool = True
    decode_escapes: bool = False

    def to_config(self) -> SamplingConfig:
        if self.list_length is None:
            return SamplingConfig(
                apply_limit=self.apply_limit, decode_escapes=self.decode_escapes
            )
        return SamplingConfig(
            max_array_length=self.list_length,
            apply_limit=self.apply_limit,
            decode_escapes=self.decode_escapes,
        )


class SampleResponse(BaseModel):
    ok: bool = True
    result: str
    display: str
    line_count: int
    display_lines: int
    truncated: bool = False
