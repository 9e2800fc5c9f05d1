"""
Runtime settings for job spec generation.

Read once from the environment at import time; every value can also be
overridden per call where it is used.
"""
import os
from pathlib import Path


BRIDGE_TIMEOUT = os.getenv("STREAMJOBS_BRIDGE_TIMEOUT", "50s")

TEMPLATE_DIR = Path(
  os.getenv(
    "STREAMJOBS_TEMPLATE_DIR",
    str(Path(__file__).parent / "compiler" / "templates"),
  )
)

LOG_LEVEL = os.getenv("STREAMJOBS_LOG_LEVEL", "INFO").upper()

# Job distributor label marking a job as a stream job
LABEL_JOB_TYPE_KEY = "jobType"
LABEL_JOB_TYPE_VALUE_STREAM = "stream"
