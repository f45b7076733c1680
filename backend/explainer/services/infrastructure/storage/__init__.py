"""Storage infrastructure - ephemeral per-request job directories."""

from .job_workspace import JOB_DIR_PREFIX, RenderJob, new_job_name

__all__ = ["JOB_DIR_PREFIX", "RenderJob", "new_job_name"]
