"""Planning of stream job proposals and revocations for the job distributor."""
from .distribute import DistributeStreamJobsConfig, plan_stream_job_proposals, stream_id_labels_from_report_fields
from .models import JobDistributor, JobProposal, JobRef, Label, ListFilter, NodeRef, Selector, SelectorOp
from .revoke import RevokeJobSpecsConfig, find_jobs_for_ids

__all__ = [
  "DistributeStreamJobsConfig",
  "plan_stream_job_proposals",
  "stream_id_labels_from_report_fields",
  "JobDistributor",
  "JobProposal",
  "JobRef",
  "Label",
  "ListFilter",
  "NodeRef",
  "Selector",
  "SelectorOp",
  "RevokeJobSpecsConfig",
  "find_jobs_for_ids",
]
