# app/schemas/sync.py
from pydantic import BaseModel


class SyncResponse(BaseModel):
    success: bool = True
    count: int


class SyncErrorResponse(BaseModel):
    success: bool = False
    error: str
