"""Building blocks for the email verifier bot.

Everything here is independent of the command and HTTP surfaces in ``bots``:
the pending-attempt store, the Google sign-in adapter and the admin log
channel helpers.
"""

from verifier_bot.google_oauth import GoogleOAuth
from verifier_bot.store import VerificationAttempt, VerificationStore, new_request_token

__all__ = [
    "GoogleOAuth",
    "VerificationAttempt",
    "VerificationStore",
    "new_request_token",
]
