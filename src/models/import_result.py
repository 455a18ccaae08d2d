"""
Import result models for broker CSV imports.
"""
import enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.trade import Trade


class BrokerFormat(str, enum.Enum):
    """Enum for the broker export layouts the importer understands"""
    METATRADER = "METATRADER"
    TRADINGVIEW = "TRADINGVIEW"
    NINJATRADER = "NINJATRADER"
    UNKNOWN = "UNKNOWN"


class ImportSummary(BaseModel):
    """Row counts for one import. Rows below the minimum column count are never counted."""
    total_processed: int = Field(default=0, alias="totalProcessed", ge=0)
    successful: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode='after')
    def check_counts(self) -> 'ImportSummary':
        if self.successful + self.failed != self.total_processed:
            raise ValueError(
                f"Summary counts do not add up: {self.successful} successful + "
                f"{self.failed} failed != {self.total_processed} processed"
            )
        return self


class ImportResult(BaseModel):
    """
    Outcome of one broker CSV import.

    success is True only when at least one trade was parsed, so callers can tell
    "nothing usable" from "partial success" even when errors is non-empty.
    """
    success: bool = False
    trades: List[Trade] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    summary: ImportSummary = Field(default_factory=ImportSummary)
    broker_format: BrokerFormat = Field(default=BrokerFormat.UNKNOWN, alias="format")

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=False
    )

    @model_validator(mode='after')
    def check_consistency(self) -> 'ImportResult':
        if self.success != (len(self.trades) > 0):
            raise ValueError("success must be True exactly when at least one trade was parsed")
        if len(self.trades) != self.summary.successful:
            raise ValueError("Number of trades does not match the successful count")
        # A fatal result carries a single error and no processed rows
        is_fatal = self.summary.total_processed == 0 and len(self.errors) == 1
        if len(self.errors) != self.summary.failed and not is_fatal:
            raise ValueError("Number of errors does not match the failed count")
        return self

    @classmethod
    def fatal(cls, message: str, broker_format: BrokerFormat = BrokerFormat.UNKNOWN) -> 'ImportResult':
        """Build the result for an import that stopped before any row was processed."""
        return cls(success=False, trades=[], errors=[message], summary=ImportSummary(), broker_format=broker_format)

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode='json', by_alias=True, exclude={'trades'})
        data['trades'] = [trade.to_dict() for trade in self.trades]
        return data
