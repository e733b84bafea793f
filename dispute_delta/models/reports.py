"""Report output models."""

from pydantic import BaseModel, Field

from dispute_delta.models.records import LedgerRecord


class DeltaSummary(BaseModel):
    anomaly_count: int = 0
    total_exposure: float = 0.0
    top_reason: str = "N/A"
    capture_matches: int = 0
    booking_matches: int = 0


class DeltaReport(BaseModel):
    """Output of one baseline/updated comparison."""

    baseline_name: str = ""
    updated_name: str = ""
    anomalies: list[LedgerRecord] = Field(default_factory=list)
    summary: DeltaSummary = Field(default_factory=DeltaSummary)
    warnings: list[str] = Field(default_factory=list)
