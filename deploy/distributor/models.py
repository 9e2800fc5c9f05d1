"""
Job distributor wire-shaped models and the client protocol.

Only the shapes are defined here; talking to a job distributor is up to
whoever implements ``JobDistributor``.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Protocol, Sequence
from uuid import UUID

from pydantic import BaseModel, Field


class SelectorOp(str, Enum):
  EQ = "EQ"
  NOT_EQ = "NOT_EQ"
  IN = "IN"
  NOT_IN = "NOT_IN"
  EXIST = "EXIST"
  NOT_EXIST = "NOT_EXIST"


class Label(BaseModel):
  key: str
  value: Optional[str] = None


class Selector(BaseModel):
  key: str
  op: SelectorOp = SelectorOp.EXIST
  value: Optional[str] = None


class ListFilter(BaseModel):
  """Selects the oracle nodes of one DON."""
  don_id: int = Field(0, ge=0)
  don_name: str = ""
  env_label: str = ""
  num_oracle_nodes: int = Field(0, ge=0)


class NodeRef(BaseModel):
  id: str
  name: str = ""


class JobProposal(BaseModel):
  node_id: str
  spec: str
  labels: List[Label] = Field(default_factory=list)


class JobRef(BaseModel):
  id: str
  uuid: str = ""
  spec: str = ""


class JobDistributor(Protocol):
  def fetch_don_oracle_nodes(self, filter: ListFilter, node_names: Sequence[str]) -> list[NodeRef]:
    ...

  def external_job_id_for(self, node_id: str, selectors: Sequence[Selector]) -> Optional[UUID]:
    """Return the external job ID of a job on the node matching the selectors, if any."""
    ...

  def list_jobs(
    self,
    *,
    uuids: Optional[Sequence[str]] = None,
    selectors: Optional[Sequence[Selector]] = None,
  ) -> list[JobRef]:
    ...


__all__ = [
  "SelectorOp",
  "Label",
  "Selector",
  "ListFilter",
  "NodeRef",
  "JobProposal",
  "JobRef",
  "JobDistributor",
]
