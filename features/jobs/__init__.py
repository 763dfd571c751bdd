"""
Jobs feature — produces, publishes and weighs BitRegisters.

Public API:
    from features.jobs import JobExecutor, BitRegister, RegisterState, derive_weight
"""

from features.jobs.executor import JobExecutor
from features.jobs.models import BitRegister, RegisterState
from features.jobs.weight import DAMPING, derive_weight

__all__ = ["BitRegister", "DAMPING", "JobExecutor", "RegisterState", "derive_weight"]
