"""
Error taxonomy for the hardware link and job pipeline.

None of these are fatal: each leaves the LinkSession in a terminal status
for the failed call and is reported through the EventLog before it is
raised to the caller.
"""

from __future__ import annotations


class NexusError(Exception):
    code = "NexusError"

    def __init__(self, message: str = "", detail: str | None = None):
        super().__init__(message or self.code)
        self.detail = detail


class MissingCredential(NexusError):
    code = "MissingCredential"


class CredentialRejected(NexusError):
    code = "CredentialRejected"

    def __init__(self, message: str = "", detail: str | None = None, status_code: int | None = None):
        super().__init__(message, detail)
        self.status_code = status_code


class LinkUnreachable(NexusError):
    code = "LinkUnreachable"


class JobPipelineInterrupted(NexusError):
    code = "JobPipelineInterrupted"


class LinkBusy(NexusError):
    """An authenticate/run_job call arrived while another one is outstanding."""
    code = "LinkBusy"


class IllegalTransition(NexusError):
    code = "IllegalTransition"
