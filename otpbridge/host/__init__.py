"""Request dispatch and the native messaging process entrypoint."""

from .dispatcher import CallFailure, CallResult, Dispatcher, Stage, call_collaborator, failure_response

__all__ = [
    "CallFailure",
    "CallResult",
    "Dispatcher",
    "Stage",
    "call_collaborator",
    "failure_response",
]
