from .claim_attempt import ClaimAttempt, ClaimOutcome

__all__ = [
    "ClaimAttempt",
    "ClaimOutcome",
]
