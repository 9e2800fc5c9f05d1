"""Datasource and observation source assembly for stream jobs."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Sequence

from oracle.schemas import EARequestParams


@dataclass(slots=True, frozen=True)
class Datasource:
  bridge_name: str
  req_data: str


@dataclass(slots=True, frozen=True)
class BaseObservationSource:
  datasources: tuple[Datasource, ...]
  allowed_faults: int


def request_data(params: EARequestParams) -> str:
  """
  Render the bridge request payload for one stream.

  The payload is embedded in the pipeline as a quoted string, so the JSON
  body is itself encoded as a JSON string literal:
  "{\\"data\\":{\\"endpoint\\":\\"price\\",\\"from\\":\\"ETH\\",\\"to\\":\\"USD\\"}}"
  """
  body = json.dumps(
    {"data": {"endpoint": params.endpoint, "from": params.from_, "to": params.to}},
    separators=(",", ":"),
    ensure_ascii=False,
  )
  return json.dumps(body, ensure_ascii=False)


def build_datasources(apis: Sequence[str], params: EARequestParams) -> list[Datasource]:
  req_data = request_data(params)
  return [Datasource(bridge_name=api, req_data=req_data) for api in apis]


def build_observation_source(datasources: Sequence[Datasource]) -> BaseObservationSource:
  """
  Wrap datasources into an observation source.

  The median tolerates every datasource but one failing.
  """
  return BaseObservationSource(
    datasources=tuple(datasources),
    allowed_faults=len(datasources) - 1,
  )


__all__ = [
  "Datasource",
  "BaseObservationSource",
  "request_data",
  "build_datasources",
  "build_observation_source",
]
