"""
Stream configuration models.

A StreamSpecConfig is the operator-authored description of one data stream:
which bridges to query, the request parameters shared by all of them, and
which fields end up in the report.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .labels import UINT32_MAX

# Values quoted inside pipeline task attributes.
_PIPELINE_STRING = r'^[^"\\\r\n]*$'

BridgeName = Annotated[str, Field(min_length=1, pattern=_PIPELINE_STRING)]


class StreamType(str, Enum):
  QUOTE = "quote"
  MEDIAN = "median"

  @classmethod
  def valid(cls, value: Any) -> bool:
    if isinstance(value, cls):
      return True
    try:
      cls(value)
    except ValueError:
      return False
    return True


class EARequestParams(BaseModel):
  """Request template shared by every external adapter bridge of a stream."""
  model_config = ConfigDict(populate_by_name=True)

  endpoint: str = Field(description="External adapter endpoint, e.g. 'price'")
  from_: str = Field("", alias="from", description="Base asset")
  to: str = Field("", description="Quote asset")


class ReportFieldLLO(BaseModel):
  result_path: str = Field(pattern=_PIPELINE_STRING, description="JSON path into the bridge response")
  # Assigns the field its own stream ID, rendered into the pipeline and
  # used as an extra job label.
  stream_id: Optional[str] = None


class QuoteReportFields(BaseModel):
  type: Literal["quote"] = "quote"
  bid: ReportFieldLLO
  benchmark: ReportFieldLLO
  ask: ReportFieldLLO

  @property
  def stream_type(self) -> StreamType:
    return StreamType.QUOTE

  def stream_ids(self) -> list[str]:
    fields = (self.benchmark, self.bid, self.ask)
    return [f.stream_id for f in fields if f.stream_id is not None]


class MedianReportFields(BaseModel):
  type: Literal["median"] = "median"
  benchmark: ReportFieldLLO

  @property
  def stream_type(self) -> StreamType:
    return StreamType.MEDIAN

  def stream_ids(self) -> list[str]:
    if self.benchmark.stream_id is None:
      return []
    return [self.benchmark.stream_id]


ReportFields = Annotated[
  Union[QuoteReportFields, MedianReportFields],
  Field(discriminator="type"),
]


class StreamSpecConfig(BaseModel):
  """
  Configuration for a single data stream job.

  ``generator`` optionally overrides the registry lookup for this stream,
  e.g. to tweak how one particular job is generated or to support a custom
  stream type. It must expose ``generate_job_spec(ssc, external_job_id)``.
  """
  model_config = ConfigDict(arbitrary_types_allowed=True)

  stream_id: int = Field(..., ge=0, le=UINT32_MAX)
  name: str
  stream_type: StreamType = StreamType.QUOTE
  report_fields: ReportFields
  ea_request_params: EARequestParams
  apis: List[BridgeName] = Field(..., min_length=1, description="Bridge names, in evaluation order")
  generator: Optional[Any] = Field(None, exclude=True)


__all__ = [
  "StreamType",
  "EARequestParams",
  "ReportFieldLLO",
  "QuoteReportFields",
  "MedianReportFields",
  "ReportFields",
  "StreamSpecConfig",
]
