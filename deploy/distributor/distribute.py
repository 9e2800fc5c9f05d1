"""
Stream job distribution planning.

Turns a batch of stream configs into one job proposal per (stream, oracle
node), labelled so the job distributor can later select jobs by DON and by
stream ID.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from deploy import settings
from deploy.compiler.generator import GeneratorRegistry, default_registry
from oracle.errors import PreconditionError
from oracle.labels import STREAM_ID_PREFIX, don_id_label, stream_id_from_label, stream_id_label
from oracle.schemas import StreamSpecConfig, StreamType

from .models import JobDistributor, JobProposal, Label, ListFilter, Selector, SelectorOp

log = logging.getLogger(__name__)


class DistributeStreamJobsConfig(BaseModel):
  filter: Optional[ListFilter] = None
  streams: List[StreamSpecConfig] = Field(default_factory=list)
  labels: List[Label] = Field(default_factory=list)
  # Nodes to distribute the job specs to
  node_names: List[str] = Field(default_factory=list)

  @staticmethod
  def _require(cond: bool, message: str) -> None:
    if not cond:
      raise PreconditionError(message)

  def verify_preconditions(self) -> "DistributeStreamJobsConfig":
    self._require(self.filter is not None, "filter is required")
    self._require(
      self.filter.don_id != 0 and self.filter.don_name != "",
      "DONID and DONName are required",
    )
    self._require(len(self.streams) > 0, "streams are required")

    for s in self.streams:
      self._require(s.stream_id != 0, "streamID is required for each stream")
      self._require(s.name != "", "name is required for each stream")
      self._require(StreamType.valid(s.stream_type), "stream type is not valid")
      self._require(s.report_fields is not None, "report fields are required for each stream")
      self._require(
        s.ea_request_params.endpoint != "",
        "endpoint is required for each EARequestParam on each stream",
      )
      self._require(len(s.apis) > 0, "at least one API is required for each stream")

    self._require(len(self.node_names) > 0, "at least one node name is required")
    # The node list must match the number of nodes the filter selects.
    if self.filter.num_oracle_nodes != len(self.node_names):
      raise PreconditionError(
        f"number of node names ({len(self.node_names)}) does not match "
        f"filter size ({self.filter.num_oracle_nodes})"
      )
    return self


def stream_id_labels_from_report_fields(report_fields: Any) -> list[Label]:
  """
  Labels for the virtual stream IDs set on report fields.

  Returns an empty list when no field carries a stream ID. Non-numeric IDs
  raise MalformedLabel and IDs beyond uint32 raise OutOfRange.
  """
  stream_ids = getattr(report_fields, "stream_ids", None)
  if stream_ids is None:
    raise PreconditionError(f"unknown report fields type: {type(report_fields).__name__}")

  labels = []
  for sid in stream_ids():
    stream_id = stream_id_from_label(f"{STREAM_ID_PREFIX}{sid}")
    labels.append(Label(key=stream_id_label(stream_id)))
  return labels


def plan_stream_job_proposals(
  cfg: DistributeStreamJobsConfig,
  distributor: JobDistributor,
  registry: Optional[GeneratorRegistry] = None,
) -> list[JobProposal]:
  """
  Build job proposals for every stream on every oracle node of the DON.

  A job already present on a node for the same stream keeps its external
  job ID, so proposing again updates it instead of adding a second job.
  Streams without a top level ID are looked up by their first virtual
  stream ID. Call ``cfg.verify_preconditions()`` first.

  Args:
    cfg: Distribution config
    distributor: Job distributor client used for node and job lookups
    registry: Generator registry; defaults to the module-level one

  Returns:
    One proposal per (stream, node), in stream order
  """
  registry = registry or default_registry

  # Every job is labelled with its DON and marked as a stream job.
  common_labels = [
    *cfg.labels,
    Label(key=don_id_label(cfg.filter.don_id, cfg.filter.don_name)),
    Label(key=settings.LABEL_JOB_TYPE_KEY, value=settings.LABEL_JOB_TYPE_VALUE_STREAM),
  ]

  nodes = distributor.fetch_don_oracle_nodes(cfg.filter, cfg.node_names)

  proposals: list[JobProposal] = []
  for s in cfg.streams:
    stream_labels = list(common_labels)
    if s.stream_id > 0:
      stream_labels.append(Label(key=stream_id_label(s.stream_id), value=s.name))
    virtual_labels = stream_id_labels_from_report_fields(s.report_fields)
    stream_labels.extend(virtual_labels)

    stream_id = s.stream_id
    if stream_id == 0:
      if not virtual_labels:
        raise PreconditionError(f"no top level or virtual streamID found for stream {s.name}")
      stream_id = stream_id_from_label(virtual_labels[0].key)

    generator = s.generator or registry.generator_for(s.stream_type)
    selectors = [Selector(key=stream_id_label(stream_id), op=SelectorOp.EXIST)]

    for node in nodes:
      external_job_id = distributor.external_job_id_for(node.id, selectors)
      spec = generator.generate_job_spec(s, external_job_id)
      proposals.append(JobProposal(node_id=node.id, spec=spec.to_toml(), labels=stream_labels))
      log.debug(
        "Planned job %s for stream %s on node %s",
        spec.external_job_id, stream_id, node.id,
      )

  log.info(
    "Planned %d stream job proposal(s) for DON %s (%s)",
    len(proposals), cfg.filter.don_id, cfg.filter.don_name,
  )
  return proposals


__all__ = [
  "DistributeStreamJobsConfig",
  "stream_id_labels_from_report_fields",
  "plan_stream_job_proposals",
]
