# schemas.py
from pydantic import BaseModel, Field
from typing import Any, List


class ShipmentRecord(BaseModel):
    source_id: str = Field(..., description="<store_id>-<order_number>")
    tracking_number: str = ""
    carrier_code: str = ""
    shipment_method: str = "Residential"


class SubmissionItem(BaseModel):
    status: str = "unknown"
    message: str = "No message provided"


class SubmissionResult(BaseModel):
    status: str = "success"
    message: str = "No message provided"
    execution_time: str = "N/A"
    results: List[SubmissionItem] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    status: int
    response: Any = None


class ErrorEnvelope(BaseModel):
    message: str
    error: ErrorDetail
