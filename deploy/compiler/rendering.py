"""
Template rendering for observation source programs and stream job TOML.

Each report fields type has its own pipeline template; the job spec itself
is rendered from stream_job.toml.j2.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from deploy import settings
from oracle.errors import ObservationSourceSerializationFailure
from oracle.schemas import StreamType

if TYPE_CHECKING:
  from .observation import BaseObservationSource
  from .spec import StreamJobSpec


OBSERVATION_SOURCE_TEMPLATES: dict[StreamType, str] = {
  StreamType.QUOTE: "osrc_mercury_v1_quote.j2",
  StreamType.MEDIAN: "osrc_mercury_v1_median.j2",
}

JOB_SPEC_TEMPLATE = "stream_job.toml.j2"


def toml_string(value: Any) -> str:
  """
  Quote a value as a TOML basic string.

  Non-ASCII characters are written as-is; TOML does not accept the
  surrogate pair escapes an ASCII-only JSON encoder would emit.
  """
  encoded = json.dumps(str(value), ensure_ascii=False)
  return encoded.replace("\x7f", "\\u007f")


def _environment(template_dir: Optional[Path | str] = None) -> Environment:
  env = Environment(
    loader=FileSystemLoader(str(template_dir or settings.TEMPLATE_DIR)),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
  )
  env.filters["toml_string"] = toml_string
  return env


def _render(template_name: str, ctx: dict[str, Any], template_dir: Optional[Path | str]) -> str:
  try:
    template = _environment(template_dir).get_template(template_name)
    return template.render(**ctx)
  except TemplateError as exc:
    raise ObservationSourceSerializationFailure(
      f"failed to render {template_name}: {exc}"
    ) from exc


def template_for_report_fields(report_fields: Any) -> str:
  stream_type = getattr(report_fields, "stream_type", None)
  template_name = OBSERVATION_SOURCE_TEMPLATES.get(stream_type)
  if template_name is None:
    raise ObservationSourceSerializationFailure(
      f"no observation source template for report fields {type(report_fields).__name__}"
    )
  return template_name


def render_observation_source(
  base: BaseObservationSource,
  report_fields: Any,
  *,
  bridge_timeout: Optional[str] = None,
  template_dir: Optional[Path | str] = None,
) -> str:
  """
  Render the pipeline program for a stream.

  The template is picked from the report fields type, not from the
  generator that called us.

  Raises:
    ObservationSourceSerializationFailure: unknown report fields type or a
      template error (missing template, undefined variable, ...)
  """
  template_name = template_for_report_fields(report_fields)
  ctx = {
    "datasources": base.datasources,
    "allowed_faults": base.allowed_faults,
    "report_fields": report_fields,
    "bridge_timeout": bridge_timeout or settings.BRIDGE_TIMEOUT,
  }
  return _render(template_name, ctx, template_dir)


def render_job_toml(spec: StreamJobSpec, *, template_dir: Optional[Path | str] = None) -> str:
  # observationSource is written as a TOML multi-line literal string
  if "'''" in spec.observation_source:
    raise ObservationSourceSerializationFailure(
      "observation source cannot contain ''' in a TOML literal string"
    )
  ctx = {
    "name": spec.name,
    "type": spec.type,
    "schema_version": spec.schema_version,
    "external_job_id": str(spec.external_job_id),
    "stream_id": spec.stream_id,
    "observation_source": spec.observation_source,
  }
  return _render(JOB_SPEC_TEMPLATE, ctx, template_dir)


__all__ = [
  "OBSERVATION_SOURCE_TEMPLATES",
  "JOB_SPEC_TEMPLATE",
  "template_for_report_fields",
  "render_observation_source",
  "render_job_toml",
  "toml_string",
]
