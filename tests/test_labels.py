"""
Tests for job distributor label encoding and decoding.
"""
import pytest

from oracle.errors import MalformedLabel, OutOfRange
from oracle.labels import PRODUCT_LABEL, UINT32_MAX, don_id_label, stream_id_from_label, stream_id_label


def test_don_label_format():
  """Test DON labels carry the ID and the cleaned name."""
  assert don_id_label(7, "My DON") == "don-7-My_DON"
  assert don_id_label(1, "prod") == "don-1-prod"


def test_don_label_collapses_runs():
  """Test each run of non-alphanumerics becomes one underscore."""
  assert don_id_label(7, "My DON!!") == "don-7-My_DON_"
  assert don_id_label(3, "a -- b..c") == "don-3-a_b_c"


def test_don_label_is_lossy():
  """Test that names differing only in punctuation share a label."""
  assert don_id_label(7, "My DON!!") == don_id_label(7, "My__DON!")
  assert don_id_label(7, "My DON") == don_id_label(7, "My_DON")


def test_don_label_non_ascii_letters_are_replaced():
  """Test that only ASCII letters and digits survive."""
  assert don_id_label(2, "Zürich DON") == "don-2-Z_rich_DON"


def test_stream_label_format():
  """Test stream labels."""
  assert stream_id_label(42) == "stream-id-42"


@pytest.mark.parametrize("stream_id", [0, 1, 42, 1000000, UINT32_MAX])
def test_stream_label_round_trip(stream_id):
  """Test that stream labels decode to the encoded ID."""
  assert stream_id_from_label(stream_id_label(stream_id)) == stream_id


def test_decode_accepts_leading_zeros():
  """Test that zero-padded IDs still parse."""
  assert stream_id_from_label("stream-id-007") == 7


@pytest.mark.parametrize(
  "label",
  [
    "not-a-label",
    "",
    "stream-id-",
    "stream-id-12a",
    "stream-id--1",
    "stream-id- 12",
    "xstream-id-12",
    "stream-id-12 ",
    "stream-id-١٢",
    "don-7-My_DON",
  ],
)
def test_decode_rejects_malformed(label):
  """Test that anything but stream-id-<digits> is malformed."""
  with pytest.raises(MalformedLabel) as exc_info:
    stream_id_from_label(label)
  assert exc_info.value.label == label


def test_decode_rejects_out_of_range():
  """Test IDs above uint32 are rejected."""
  with pytest.raises(OutOfRange) as exc_info:
    stream_id_from_label("stream-id-99999999999999")
  assert "stream-id-99999999999999" in str(exc_info.value)

  with pytest.raises(OutOfRange):
    stream_id_from_label(f"stream-id-{UINT32_MAX + 1}")


def test_decode_very_long_digit_runs():
  """Test huge numbers are out of range and long zero padding is ignored."""
  with pytest.raises(OutOfRange):
    stream_id_from_label("stream-id-" + "9" * 5000)

  assert stream_id_from_label("stream-id-" + "0" * 5000 + "7") == 7
  assert stream_id_from_label("stream-id-" + "0" * 5000) == 0
  assert stream_id_from_label(f"stream-id-000{UINT32_MAX}") == UINT32_MAX


def test_decode_errors_are_value_errors():
  """Test that label errors can be caught as ValueError."""
  with pytest.raises(ValueError):
    stream_id_from_label("nope")


def test_product_label():
  """Test the product label value."""
  assert PRODUCT_LABEL == "data-streams"
