from datetime import datetime

from pydantic import BaseModel, Field

SCANNER_PATTERN = "^(thermal|spectral|quantum|neural|infrared|gravimetric|manual)$"


class TraceRecord(BaseModel):
    sector: str = Field(..., pattern=r"^\d{2}$", description="Two-digit sector code")
    scanner: str = Field(..., pattern=SCANNER_PATTERN)
    timestamp: datetime


class OutputLine(BaseModel):
    text: str
    style: str = Field("", pattern="^(|error|warning|success)$")
