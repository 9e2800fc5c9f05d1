"""
Job spec generators per stream type.

Each stream type maps to a generator in an enum-keyed table. Bootstrap and
LLO job specs are not generated here.
"""
from __future__ import annotations

import uuid
from pathlib import Path
from typing import Callable, Mapping, Optional, Protocol

from oracle.errors import UnsupportedStreamType
from oracle.schemas import StreamSpecConfig, StreamType

from .observation import build_datasources, build_observation_source
from .spec import NIL_UUID, StreamJobSpec

IdFactory = Callable[[], uuid.UUID]


class JobSpecGenerator(Protocol):
  def generate_job_spec(
    self,
    ssc: StreamSpecConfig,
    external_job_id: Optional[uuid.UUID] = None,
  ) -> StreamJobSpec:
    ...


class QuoteStreamJobSpecGenerator:
  """Generates stream job specs for quote streams."""

  def __init__(
    self,
    id_factory: IdFactory = uuid.uuid4,
    *,
    bridge_timeout: Optional[str] = None,
    template_dir: Optional[Path | str] = None,
  ):
    self.id_factory = id_factory
    self.bridge_timeout = bridge_timeout
    self.template_dir = template_dir

  def generate_job_spec(
    self,
    ssc: StreamSpecConfig,
    external_job_id: Optional[uuid.UUID] = None,
  ) -> StreamJobSpec:
    """
    Build the job spec for one stream.

    A missing or nil ``external_job_id`` is replaced with a fresh one from
    the id factory. Rendering errors propagate as
    ObservationSourceSerializationFailure.
    """
    if external_job_id is None or external_job_id == NIL_UUID:
      external_job_id = self.id_factory()

    spec = StreamJobSpec(
      name=f"{ssc.name} | {ssc.stream_id}",
      external_job_id=external_job_id,
      stream_id=ssc.stream_id,
    )

    datasources = build_datasources(ssc.apis, ssc.ea_request_params)
    base = build_observation_source(datasources)
    spec.set_observation_source(
      base,
      ssc.report_fields,
      bridge_timeout=self.bridge_timeout,
      template_dir=self.template_dir,
    )
    return spec


class MedianStreamJobSpecGenerator:
  """Median streams are generated exactly like quote streams."""

  def __init__(self, id_factory: IdFactory = uuid.uuid4, **options):
    self._quote = QuoteStreamJobSpecGenerator(id_factory, **options)

  @property
  def id_factory(self) -> IdFactory:
    return self._quote.id_factory

  def generate_job_spec(
    self,
    ssc: StreamSpecConfig,
    external_job_id: Optional[uuid.UUID] = None,
  ) -> StreamJobSpec:
    return self._quote.generate_job_spec(ssc, external_job_id)


GENERATOR_TYPES: dict[StreamType, Callable[..., JobSpecGenerator]] = {
  StreamType.QUOTE: QuoteStreamJobSpecGenerator,
  StreamType.MEDIAN: MedianStreamJobSpecGenerator,
}


def _lookup_key(stream_type: StreamType | str) -> Optional[StreamType]:
  if isinstance(stream_type, StreamType):
    return stream_type
  if not isinstance(stream_type, str):
    return None
  try:
    return StreamType(stream_type.strip().lower())
  except ValueError:
    return None


class GeneratorRegistry:
  """
  Resolves stream types to job spec generators.

  The id factory is handed to every generator it creates, so tests can
  pass a deterministic one.
  """

  def __init__(
    self,
    id_factory: IdFactory = uuid.uuid4,
    generators: Optional[Mapping[StreamType, Callable[..., JobSpecGenerator]]] = None,
    *,
    bridge_timeout: Optional[str] = None,
    template_dir: Optional[Path | str] = None,
  ):
    self.id_factory = id_factory
    self._generators = dict(GENERATOR_TYPES if generators is None else generators)
    self._options = {"bridge_timeout": bridge_timeout, "template_dir": template_dir}

  @property
  def supported_types(self) -> list[StreamType]:
    return list(self._generators)

  def generator_for(self, stream_type: StreamType | str) -> JobSpecGenerator:
    key = _lookup_key(stream_type)
    factory = self._generators.get(key) if key is not None else None
    if factory is None:
      raise UnsupportedStreamType(stream_type)
    return factory(self.id_factory, **self._options)


default_registry = GeneratorRegistry()


def generator_for_stream_type(stream_type: StreamType | str) -> JobSpecGenerator:
  return default_registry.generator_for(stream_type)


__all__ = [
  "IdFactory",
  "JobSpecGenerator",
  "QuoteStreamJobSpecGenerator",
  "MedianStreamJobSpecGenerator",
  "GENERATOR_TYPES",
  "GeneratorRegistry",
  "default_registry",
  "generator_for_stream_type",
]
