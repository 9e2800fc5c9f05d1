"""Tests for observation source assembly and rendering."""
import uuid

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from deploy.compiler import QuoteStreamJobSpecGenerator
from deploy.compiler.observation import (
  BaseObservationSource,
  Datasource,
  build_datasources,
  build_observation_source,
  request_data,
)
from deploy.compiler.rendering import render_observation_source, template_for_report_fields
from deploy.compiler.spec import StreamJobSpec
from oracle.errors import ObservationSourceSerializationFailure
from oracle.schemas import (
  EARequestParams,
  MedianReportFields,
  QuoteReportFields,
  ReportFieldLLO,
  StreamSpecConfig,
)

PARAMS = EARequestParams(endpoint="price", from_="ETH", to="USD")
MEDIAN_FIELDS = MedianReportFields(benchmark=ReportFieldLLO(result_path="data,result"))


def test_request_data_template():
  """Test the request payload is a quoted JSON string."""
  expected = r'"{\"data\":{\"endpoint\":\"price\",\"from\":\"ETH\",\"to\":\"USD\"}}"'

  assert request_data(PARAMS) == expected


def test_build_datasources_preserves_order():
  """Test one datasource per API in the given order."""
  datasources = build_datasources(["b", "a", "c"], PARAMS)

  assert [ds.bridge_name for ds in datasources] == ["b", "a", "c"]
  assert all(ds.req_data == request_data(PARAMS) for ds in datasources)


@pytest.mark.parametrize("count", [1, 2, 3, 7])
def test_allowed_faults_is_count_minus_one(count):
  """Test allowedFaults = len(datasources) - 1."""
  base = build_observation_source(build_datasources([f"api{i}" for i in range(count)], PARAMS))

  assert len(base.datasources) == count
  assert base.allowed_faults == count - 1


def test_observation_source_is_immutable():
  """Test the built observation source is a frozen value."""
  base = build_observation_source([Datasource("a", "{}")])

  with pytest.raises(AttributeError):
    base.allowed_faults = 5


def test_template_chosen_by_report_fields():
  """Test template lookup per report fields type."""
  quote = QuoteReportFields(
    bid=ReportFieldLLO(result_path="b"),
    benchmark=ReportFieldLLO(result_path="m"),
    ask=ReportFieldLLO(result_path="a"),
  )

  assert template_for_report_fields(quote) == "osrc_mercury_v1_quote.j2"
  assert template_for_report_fields(MEDIAN_FIELDS) == "osrc_mercury_v1_median.j2"


def test_unknown_report_fields_fail():
  """Test that report fields without a template fail to serialize."""
  base = build_observation_source(build_datasources(["a"], PARAMS))

  with pytest.raises(ObservationSourceSerializationFailure, match="dict"):
    render_observation_source(base, {"benchmark": "x"})


def test_missing_template_directory_fails(tmp_path):
  """Test a missing template surfaces with its cause."""
  base = build_observation_source(build_datasources(["a"], PARAMS))

  with pytest.raises(ObservationSourceSerializationFailure) as exc_info:
    render_observation_source(base, MEDIAN_FIELDS, template_dir=tmp_path)
  assert isinstance(exc_info.value.__cause__, TemplateNotFound)


def test_undefined_template_variable_fails(tmp_path):
  """Test strict undefined variables abort rendering."""
  (tmp_path / "osrc_mercury_v1_median.j2").write_text("{{ no_such_thing }}\n")
  base = build_observation_source(build_datasources(["a"], PARAMS))

  with pytest.raises(ObservationSourceSerializationFailure) as exc_info:
    render_observation_source(base, MEDIAN_FIELDS, template_dir=tmp_path)
  assert isinstance(exc_info.value.__cause__, UndefinedError)


def test_generator_propagates_serialization_failure(tmp_path):
  """Test a generator surfaces rendering errors instead of returning a spec."""
  ssc = StreamSpecConfig(
    name="ETH/USD",
    stream_id=42,
    apis=["a"],
    ea_request_params=PARAMS,
    report_fields=MEDIAN_FIELDS,
  )
  generator = QuoteStreamJobSpecGenerator(template_dir=tmp_path)

  with pytest.raises(ObservationSourceSerializationFailure):
    generator.generate_job_spec(ssc)


def test_set_observation_source_on_spec():
  """Test rendering onto a bare spec."""
  spec = StreamJobSpec(name="x | 1", external_job_id=uuid.uuid4(), stream_id=1)
  base = BaseObservationSource(datasources=(Datasource("api", request_data(PARAMS)),), allowed_faults=0)

  assert spec.observation_source == ""
  spec.set_observation_source(base, MEDIAN_FIELDS, bridge_timeout="5s")

  assert 'ds1_payload [type=bridge name="api" timeout="5s"' in spec.observation_source
  assert "allowedFaults=0" in spec.observation_source


def test_spec_without_observation_source_omits_key():
  """Test an empty observation source is left out of the TOML."""
  spec = StreamJobSpec(name="x | 1", external_job_id=uuid.uuid4(), stream_id=1)

  assert "observationSource" not in spec.to_toml()


def test_spec_rejects_nil_external_job_id():
  """Test the nil UUID is never accepted on a spec."""
  with pytest.raises(ValueError):
    StreamJobSpec(name="x | 1", external_job_id=uuid.UUID(int=0), stream_id=1)


def test_toml_rejects_literal_terminator():
  """Test observation sources that would break the TOML literal are refused."""
  spec = StreamJobSpec(name="x | 1", external_job_id=uuid.uuid4(), stream_id=1)
  spec.observation_source = "a ''' b"

  with pytest.raises(ObservationSourceSerializationFailure):
    spec.to_toml()
