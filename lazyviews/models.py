"""
Pydantic models for lazyviews.

Settings that steer cursor checks and logging, and the reports produced by
the evaluation profiling helpers in ``lazyviews.utils``.
"""

import logging
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


class ViewSettings(BaseModel):
    """Process-wide behaviour of views and cursors"""
    check_stale_cursors: bool = Field(
        True,
        description="Raise StaleIteratorError when a shared sequence is reset under a live cursor"
    )
    log_level: str = Field(
        "WARNING",
        description="Level applied to the 'lazyviews' logger"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is a standard logging level name"""
        level = str(v).strip().upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if level not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Valid levels: {valid_levels}")
        return level

    def numeric_log_level(self) -> int:
        """Get the logging module constant for log_level"""
        return getattr(logging, self.log_level)


class EvaluationReport(BaseModel):
    """Timing and memory of forcing one view"""
    operation: str = Field(..., description="Name given to the measured evaluation")
    execution_time_ms: float = Field(..., description="Wall time in milliseconds", ge=0)
    memory_usage_mb: float = Field(..., description="Peak traced memory in megabytes", ge=0)
    success: bool = Field(..., description="Whether evaluation completed")
    result_size: Optional[int] = Field(None, description="Number of collected elements", ge=0)
    result: Optional[Any] = Field(None, description="The collected container")
    error: Optional[str] = Field(None, description="Error message if evaluation failed")
    timestamp: float = Field(..., description="Epoch seconds when the measurement finished")


class PerformanceSummary(BaseModel):
    """Aggregate of all recorded evaluation reports"""
    total_operations: int = Field(0, ge=0)
    total_time_ms: float = Field(0.0, ge=0)
    total_memory_mb: float = Field(0.0, ge=0)
    avg_time_ms: float = Field(0.0, ge=0)
    avg_memory_mb: float = Field(0.0, ge=0)
