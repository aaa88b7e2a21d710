from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

ValueType = Literal["int16", "int32", "int64", "float32", "float64", "string", "bytes", "object"]


class Entry(BaseModel):
    tag: int
    type: ValueType
    value: Any


class EncodeRequest(BaseModel):
    entries: List[Entry] = Field(default_factory=list)


class EncodeResponse(BaseModel):
    data: str
    length: int
    entries: int


class DecodeRequest(BaseModel):
    data: str
    offset: int = 0
    length: Optional[int] = None
    types: Dict[int, ValueType] = Field(default_factory=dict)


class Record(BaseModel):
    tag: int
    offset: int
    length: int
    payload: str
    name: str


class DecodeResponse(BaseModel):
    records: List[Record] = Field(default_factory=list)
    values: Dict[int, Any] = Field(default_factory=dict)
    total_bytes: int


class ErrorDetail(BaseModel):
    error: str
    message: str


class ErrorResponse(BaseModel):
    detail: ErrorDetail
