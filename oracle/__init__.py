"""Data model, labels and errors shared by job generation and distribution."""
from .errors import (
  MalformedLabel,
  ObservationSourceSerializationFailure,
  OutOfRange,
  PreconditionError,
  StreamJobsError,
  UnsupportedStreamType,
)
from .labels import PRODUCT_LABEL, don_id_label, stream_id_from_label, stream_id_label

__all__ = [
  "StreamJobsError",
  "UnsupportedStreamType",
  "ObservationSourceSerializationFailure",
  "MalformedLabel",
  "OutOfRange",
  "PreconditionError",
  "PRODUCT_LABEL",
  "don_id_label",
  "stream_id_label",
  "stream_id_from_label",
]
