from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class EditOpModel(BaseModel):
    op: Literal["match", "sub", "ins", "del", "swap"]
    expected: Optional[str] = None
    predicted: Optional[str] = None


class PairResult(BaseModel):
    index: int
    left: str
    right: str
    distance: int = Field(ge=0)
    substitutions: Optional[int] = None
    insertions: Optional[int] = None
    deletions: Optional[int] = None
    transpositions: Optional[int] = None
    ops: list[EditOpModel] = Field(default_factory=list)


class BatchResult(BaseModel):
    unit: str
    pairs: list[PairResult] = Field(default_factory=list)
    total_distance: int = 0
