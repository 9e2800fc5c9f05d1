"""Stream job spec models."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from oracle.labels import UINT32_MAX

from .observation import BaseObservationSource
from .rendering import render_job_toml, render_observation_source

JOB_SPEC_TYPE_STREAM = "stream"
NIL_UUID = UUID(int=0)


class BaseJobSpec(BaseModel):
  name: str
  type: Literal["stream"] = JOB_SPEC_TYPE_STREAM
  schema_version: Literal[1] = 1
  external_job_id: UUID = Field(frozen=True)

  @field_validator("external_job_id")
  @classmethod
  def _reject_nil(cls, value: UUID) -> UUID:
    if value == NIL_UUID:
      raise ValueError("externalJobID must not be the nil UUID")
    return value


class StreamJobSpec(BaseJobSpec):
  """
  Job spec for a single stream on a single node.

  ``observation_source`` stays empty until ``set_observation_source``
  renders the pipeline program.
  """

  stream_id: int = Field(..., ge=0, le=UINT32_MAX)
  observation_source: str = ""

  def set_observation_source(
    self,
    base: BaseObservationSource,
    report_fields: Any,
    *,
    bridge_timeout: Optional[str] = None,
    template_dir: Optional[Path | str] = None,
  ) -> None:
    self.observation_source = render_observation_source(
      base,
      report_fields,
      bridge_timeout=bridge_timeout,
      template_dir=template_dir,
    )

  def to_toml(self, *, template_dir: Optional[Path | str] = None) -> str:
    return render_job_toml(self, template_dir=template_dir)


__all__ = ["JOB_SPEC_TYPE_STREAM", "NIL_UUID", "BaseJobSpec", "StreamJobSpec"]
