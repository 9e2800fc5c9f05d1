#!/usr/bin/env python3
"""
streamjobs CLI - render data streams job specs and job distributor labels.

  streamjobs generate streams.json
  streamjobs generate streams.json --type median --external-job-id <uuid>
  streamjobs label don 7 "My DON"
  streamjobs label stream 42
  streamjobs label decode stream-id-42
"""
import argparse
import json
import logging
import sys
import uuid
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from deploy import settings
from deploy.compiler import GeneratorRegistry
from oracle import PreconditionError, StreamJobsError, don_id_label, stream_id_from_label, stream_id_label
from oracle.schemas import StreamSpecConfig

log = logging.getLogger("streamjobs.cli")

_STREAMS = TypeAdapter(list[StreamSpecConfig])


def load_stream_configs(path: Path) -> list[StreamSpecConfig]:
  """Load one stream config object, or a list of them, from a JSON file."""
  data: Any = json.loads(path.read_text(encoding="utf-8"))
  if isinstance(data, dict) and "streams" in data:
    data = data["streams"]
  if isinstance(data, dict):
    data = [data]
  return _STREAMS.validate_python(data)


class StreamJobsCLI:
  """Terminal front end for job spec generation and labels."""

  def __init__(self, console: Optional[Console] = None, registry: Optional[GeneratorRegistry] = None):
    self.console = console or Console()
    self.registry = registry or GeneratorRegistry()

  def generate(
    self,
    config_path: Path,
    stream_type: Optional[str] = None,
    external_job_id: Optional[uuid.UUID] = None,
    raw: bool = False,
  ) -> None:
    streams = load_stream_configs(config_path)
    log.info("Loaded %d stream config(s) from %s", len(streams), config_path)
    if external_job_id is not None and len(streams) > 1:
      raise PreconditionError(
        f"--external-job-id names a single job spec but {config_path} holds {len(streams)} streams"
      )

    for ssc in streams:
      generator = ssc.generator or self.registry.generator_for(stream_type or ssc.stream_type)
      spec = generator.generate_job_spec(ssc, external_job_id)
      rendered = spec.to_toml()

      if raw:
        self.console.print(rendered, markup=False, highlight=False, emoji=False, soft_wrap=True)
        continue

      self.console.print(
        Panel(
          Syntax(rendered, "toml", word_wrap=True),
          title=f"[bold cyan]{escape(spec.name)}[/]",
          subtitle=f"[dim]{spec.external_job_id}[/]",
          border_style="cyan",
        )
      )

  def show_don_label(self, don_id: int, don_name: str) -> None:
    self.console.print(don_id_label(don_id, don_name), markup=False, highlight=False)

  def show_stream_label(self, stream_id: int) -> None:
    self.console.print(stream_id_label(stream_id), markup=False, highlight=False)

  def decode_stream_label(self, label: str) -> None:
    stream_id = stream_id_from_label(label)
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Label")
    table.add_column("Stream ID", justify="right")
    table.add_row(label, str(stream_id))
    self.console.print(table)


def _uint(value: str) -> int:
  number = int(value)
  if number < 0:
    raise argparse.ArgumentTypeError(f"{value} is negative")
  return number


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(prog="streamjobs", description="Data streams job spec tooling")
  parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level")
  commands = parser.add_subparsers(dest="command", required=True)

  generate = commands.add_parser("generate", help="Render stream job specs from a JSON config")
  generate.add_argument("config", type=Path, help="JSON file with one stream config or a list")
  generate.add_argument("--type", dest="stream_type", help="Override the stream type (quote, median)")
  generate.add_argument("--external-job-id", type=uuid.UUID, help="Reuse an existing external job ID")
  generate.add_argument("--raw", action="store_true", help="Print bare TOML")

  label = commands.add_parser("label", help="Encode or decode job distributor labels")
  label_commands = label.add_subparsers(dest="label_command", required=True)
  don = label_commands.add_parser("don", help="Label for a DON")
  don.add_argument("don_id", type=_uint)
  don.add_argument("don_name")
  stream = label_commands.add_parser("stream", help="Label for a stream ID")
  stream.add_argument("stream_id", type=_uint)
  decode = label_commands.add_parser("decode", help="Stream ID from a stream label")
  decode.add_argument("label")

  return parser


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
  """Main entry point."""
  args = build_parser().parse_args(argv)

  logging.basicConfig(
    level=args.log_level.upper(),
    format="%(message)s",
    handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
  )

  cli = StreamJobsCLI(console=console)
  try:
    if args.command == "generate":
      cli.generate(args.config, args.stream_type, args.external_job_id, args.raw)
    elif args.label_command == "don":
      cli.show_don_label(args.don_id, args.don_name)
    elif args.label_command == "stream":
      cli.show_stream_label(args.stream_id)
    else:
      cli.decode_stream_label(args.label)
  except (StreamJobsError, ValidationError, OSError, json.JSONDecodeError) as e:
    cli.console.print(f"Error: {e}", style="red", markup=False, highlight=False)
    return 1
  return 0


if __name__ == "__main__":
  sys.exit(main())
