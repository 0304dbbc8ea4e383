from typing import Any, Optional

from pydantic import BaseModel, Field


class BaseResponse(BaseModel):
    success: bool = True
    message: Optional[str] = Field(default=None)
    data: Optional[Any] = None


class ErrorDetail(BaseModel):
    field: str = ""
    code: str = Field(default="ERROR")
    message: str = Field(default="Unknown Error")
    target: Optional[str] = Field(default=None)


class ErrorResponse(BaseResponse):
    success: bool = Field(default=False)
    error_code: str = Field(default="ERROR")
    error_details: list[ErrorDetail] = Field(default=[])
