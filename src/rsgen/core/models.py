from typing import Any

from pydantic import BaseModel, Field, model_validator

from rsgen.charset.models import CharsetPolicy, LatinAlphabetAndNumeric
from rsgen.core.random_source import SEED_MAX

DEFAULT_LENGTH = 8
DEFAULT_LINES = 1

_INT_FIELDS = ("length", "lines", "seed")


def _validate_no_bool_ints(data: Any) -> None:
    if not isinstance(data, dict):
        return

    for field_name in _INT_FIELDS:
        if isinstance(data.get(field_name), bool):
            raise ValueError(f"{field_name}: bool is not allowed")


class GenerationRequest(BaseModel):
    """Fully resolved configuration for one rsgen invocation."""

    length: int = Field(default=DEFAULT_LENGTH, ge=0)
    lines: int = Field(default=DEFAULT_LINES, ge=1)
    fast: bool = False
    seed: int | None = Field(default=None, ge=0, le=SEED_MAX)
    charset: CharsetPolicy = Field(default_factory=LatinAlphabetAndNumeric)

    @model_validator(mode="before")
    @classmethod
    def validate_input(cls, data: Any) -> Any:
        _validate_no_bool_ints(data)
        return data

    @model_validator(mode="after")
    def validate_request(self) -> "GenerationRequest":
        if self.seed is not None and not self.fast:
            raise ValueError("seed requires the fast random source")
        return self
