from pdfservices.jobs.models import Job
from pdfservices.jobs.poller import DEFAULT_INTERVAL, JobPoller

__all__ = ["DEFAULT_INTERVAL", "Job", "JobPoller"]
