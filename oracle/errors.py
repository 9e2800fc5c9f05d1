class StreamJobsError(Exception):
  """Base exception for job spec generation and labeling."""


class UnsupportedStreamType(StreamJobsError, ValueError):
  """Raised when no generator is registered for a stream type tag."""

  def __init__(self, stream_type: object):
    self.stream_type = stream_type
    tag = getattr(stream_type, "value", stream_type)
    super().__init__(f"unsupported stream type: {tag}")


class ObservationSourceSerializationFailure(StreamJobsError):
  """Raised when the observation source program cannot be rendered."""


class MalformedLabel(StreamJobsError, ValueError):
  """Raised when a label does not follow the stream-id-<digits> grammar."""

  def __init__(self, label: str):
    self.label = label
    super().__init__(f"invalid stream ID label: {label}")


class OutOfRange(StreamJobsError, ValueError):
  """Raised when a stream ID does not fit in 32 unsigned bits."""

  def __init__(self, label: str):
    self.label = label
    super().__init__(f"stream ID out of uint32 range: {label}")


class PreconditionError(StreamJobsError, ValueError):
  """Raised when a distribution or revocation config is rejected up front."""
