from typing import List

from pydantic import BaseModel, validator


class ExpressionRequest(BaseModel):
    expression: str

    @validator("expression")
    def validate_expression(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("expression must not be empty")
        return v


class EvaluateResponse(BaseModel):
    result: float
    expression: str
    rpn: List[str]
    can_undo: bool
    can_redo: bool


class StateResponse(BaseModel):
    current_value: float
    last_operation: str
    can_undo: bool
    can_redo: bool


class HistoryInfo(BaseModel):
    total_states: int
    current_index: int
    can_undo: bool
    can_redo: bool


class StateWithInfoResponse(BaseModel):
    current_value: float
    last_operation: str
    history_info: HistoryInfo


class HistoryEntry(BaseModel):
    value: float
    label: str
    timestamp: str
    is_current: bool


class HistoryResponse(BaseModel):
    history: List[HistoryEntry]
    info: HistoryInfo
