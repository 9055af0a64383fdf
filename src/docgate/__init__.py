"""docgate - rate-limited admission for outbound API calls.

This package provides an admission gate that lets at most N operations
through per time window, and a document API client that submits through
such a gate.
"""

__version__ = "0.1.0"

from docgate.exceptions import (
    AdmissionCancelledError,
    DocGateError,
    InvalidConfigurationError,
    SubmissionError,
)
from docgate.gate import AdmissionGate, AsyncAdmissionGate, TimeUnit

__all__ = [
    "__version__",
    "AdmissionGate",
    "AsyncAdmissionGate",
    "TimeUnit",
    "DocGateError",
    "InvalidConfigurationError",
    "AdmissionCancelledError",
    "SubmissionError",
]
