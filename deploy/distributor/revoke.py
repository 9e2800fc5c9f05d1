"""
Job revocation planning.

A job is found either by its external job ID (UUID) or by the stream it
serves, never both in one request.
"""
from __future__ import annotations

import logging
from typing import Annotated, List, Sequence

from pydantic import BaseModel, Field

from oracle.errors import PreconditionError
from oracle.labels import UINT32_MAX, stream_id_label

from .models import JobDistributor, JobRef, Selector, SelectorOp

log = logging.getLogger(__name__)

StreamID = Annotated[int, Field(ge=0, le=UINT32_MAX)]


def _require_one_of(uuids: Sequence[str], stream_ids: Sequence[int]) -> None:
  if bool(uuids) == bool(stream_ids):
    raise PreconditionError("either job ids or stream ids are required")


class RevokeJobSpecsConfig(BaseModel):
  uuids: List[str] = Field(default_factory=list, description="External job IDs to revoke")
  stream_ids: List[StreamID] = Field(default_factory=list)

  def verify_preconditions(self) -> "RevokeJobSpecsConfig":
    _require_one_of(self.uuids, self.stream_ids)
    return self


def find_jobs_for_uuids(distributor: JobDistributor, uuids: Sequence[str]) -> list[JobRef]:
  jobs = distributor.list_jobs(uuids=list(uuids))
  if len(jobs) != len(uuids):
    raise PreconditionError("failed to find jobs for all provided UUIDs")
  return jobs


def find_jobs_for_stream_ids(distributor: JobDistributor, stream_ids: Sequence[int]) -> list[JobRef]:
  jobs: list[JobRef] = []
  # Stream labels are flags and selectors are ANDed, so query once per stream.
  for sid in stream_ids:
    selector = Selector(key=stream_id_label(sid), op=SelectorOp.EXIST)
    found = distributor.list_jobs(selectors=[selector])
    log.debug("Found %d job(s) for stream %s", len(found), sid)
    jobs.extend(found)
  return jobs


def find_jobs_for_ids(
  distributor: JobDistributor,
  uuids: Sequence[str],
  stream_ids: Sequence[int],
) -> list[JobRef]:
  _require_one_of(uuids, stream_ids)
  if uuids:
    return find_jobs_for_uuids(distributor, uuids)
  return find_jobs_for_stream_ids(distributor, stream_ids)


__all__ = [
  "RevokeJobSpecsConfig",
  "find_jobs_for_uuids",
  "find_jobs_for_stream_ids",
  "find_jobs_for_ids",
]
