"""Application layer: sessions, intents and derived views."""

from tripboard.application.reducer import IntentResult, Outcome, OutcomeStatus, apply_intent, apply_intents
from tripboard.application.session import TripSession, new_session

__all__ = [
    "IntentResult",
    "Outcome",
    "OutcomeStatus",
    "TripSession",
    "apply_intent",
    "apply_intents",
    "new_session",
]
