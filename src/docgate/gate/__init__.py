"""Admission gates pacing operations to a fixed number per time window."""

from docgate.gate.admission import AdmissionGate
from docgate.gate.async_admission import AsyncAdmissionGate
from docgate.gate.bucket import Bucket, BucketState
from docgate.gate.units import TimeUnit

__all__ = [
    "AdmissionGate",
    "AsyncAdmissionGate",
    "Bucket",
    "BucketState",
    "TimeUnit",
]
