"""
Job distributor label helpers.

Label keys on the job distributor only accept a restricted character set,
so DON names are squashed to alphanumerics and underscores. Stream labels
carry the numeric stream ID and can be parsed back.
"""
import re

from .errors import MalformedLabel, OutOfRange

PRODUCT_LABEL = "data-streams"

STREAM_ID_PREFIX = "stream-id-"
UINT32_MAX = 2**32 - 1

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")
_ASCII_DIGITS = frozenset("0123456789")
_UINT32_DIGITS = len(str(UINT32_MAX))


def don_id_label(don_id: int, don_name: str) -> str:
  """
  Build the label identifying a DON.

  Every run of non-alphanumeric characters in the name becomes a single
  underscore, so "My DON" and "My_DON" share a label.
  """
  clean_name = _NON_ALNUM.sub("_", don_name)
  return f"don-{don_id}-{clean_name}"


def stream_id_label(stream_id: int) -> str:
  return f"{STREAM_ID_PREFIX}{stream_id}"


def stream_id_from_label(label: str) -> int:
  """
  Recover the stream ID from a label built by ``stream_id_label``.

  Raises:
    MalformedLabel: label is not exactly "stream-id-" followed by ASCII digits
    OutOfRange: the number does not fit in 32 unsigned bits
  """
  if not isinstance(label, str) or not label.startswith(STREAM_ID_PREFIX):
    raise MalformedLabel(label)
  digits = label[len(STREAM_ID_PREFIX):]
  if not digits or not set(digits) <= _ASCII_DIGITS:
    raise MalformedLabel(label)

  significant = digits.lstrip("0") or "0"
  if len(significant) > _UINT32_DIGITS:
    raise OutOfRange(label)
  stream_id = int(significant)
  if stream_id > UINT32_MAX:
    raise OutOfRange(label)
  return stream_id


__all__ = [
  "PRODUCT_LABEL",
  "STREAM_ID_PREFIX",
  "UINT32_MAX",
  "don_id_label",
  "stream_id_label",
  "stream_id_from_label",
]
