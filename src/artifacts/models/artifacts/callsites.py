"""Call-site manifest models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from contract.artifacts import ARTIFACT_SCHEMA_VERSION

CallShape = Literal["bare", "labeled"]


class CallSiteRecord(BaseModel):
    """Schema for callsites.jsonl records."""

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    callsite_id: str
    path: str = Field(description="Path relative to the project root")
    namespace: str
    file: str = Field(description="Editor path baked into the call")
    line: int
    col: int
    function_name: str = ""
    src: str | None = None
    context: Literal["script", "embedded"]
    shape: CallShape


__all__ = ["CallShape", "CallSiteRecord"]
