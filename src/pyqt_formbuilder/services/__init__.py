"""
Service layer for form management.

Cross-cutting concerns shared by the form state, its fields and the form
container: flag guards, signal blocking and dismissal veto.
"""

from .flag_context_manager import FlagContextManager, FormFlag
from .signal_service import SignalService
from .dismiss_guard import DismissGuard

__all__ = [
    "FlagContextManager",
    "FormFlag",
    "SignalService",
    "DismissGuard",
]
