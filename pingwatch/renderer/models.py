"""Data models for rendered status output."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class RunInfo(BaseModel):
    """Information about one refresh pass.

    Attributes:
        run_id: Unique run identifier.
        started_at: When the pass started.
        finished_at: When the pass finished.
        source: Name of the data source used.
        records_total: Records fed into aggregation.
        high_latency_threshold_ms: Threshold used for classification.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    run_id: Annotated[str, Field(min_length=1)]
    started_at: datetime
    finished_at: datetime | None = None
    source: str = ""
    records_total: Annotated[int, Field(ge=0)] = 0
    high_latency_threshold_ms: float | None = None


class GeneratedFile(BaseModel):
    """A file written by the renderer."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str
    absolute_path: str
    bytes_written: Annotated[int, Field(ge=0)]
    sha256: Annotated[str, Field(min_length=64, max_length=64)]
