"""
Pydantic schemas for the question board API.

Request fields are optional so that missing input is reported with the
board's own error codes instead of a generic validation failure. Scalar
values are accepted where text is expected, as older clients send them.
"""

from __future__ import annotations

import json
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _as_text(value):
    # Falsy values count as missing; numbers and booleans are read as text.
    if not value:
        return None
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return value


LooseText = Annotated[Optional[str], BeforeValidator(_as_text)]
Truthy = Annotated[bool, BeforeValidator(bool)]


class CreateQuestionPayload(BaseModel):
    text: LooseText = None


class UpdateQuestionPayload(BaseModel):
    id: LooseText = None
    action: LooseText = None


class DeleteQuestionPayload(BaseModel):
    id: LooseText = None
    all: Truthy = False


class QuestionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    created_at: str = Field(..., alias="createdAt")
    votes: int = 0
    hidden: bool = False


class UpdateQuestionResponse(BaseModel):
    ok: Literal[True] = True
    row: dict


class DeleteQuestionResponse(BaseModel):
    ok: Literal[True] = True


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
