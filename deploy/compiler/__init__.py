"""Compiler module for generating stream job specs."""
from .generator import (
  GeneratorRegistry,
  JobSpecGenerator,
  MedianStreamJobSpecGenerator,
  QuoteStreamJobSpecGenerator,
  generator_for_stream_type,
)
from .observation import BaseObservationSource, Datasource, build_datasources, build_observation_source
from .spec import BaseJobSpec, StreamJobSpec

__all__ = [
  "GeneratorRegistry",
  "JobSpecGenerator",
  "QuoteStreamJobSpecGenerator",
  "MedianStreamJobSpecGenerator",
  "generator_for_stream_type",
  "BaseObservationSource",
  "Datasource",
  "build_datasources",
  "build_observation_source",
  "BaseJobSpec",
  "StreamJobSpec",
]
