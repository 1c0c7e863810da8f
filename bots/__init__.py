"""Discord-facing parts of the email verifier.

`bots.verification` owns the /verify command, `bots.callback` the OAuth
redirect endpoint, and `bots.runtime` wires both to a single event loop.
"""

__all__ = ["callback", "config", "context", "runtime", "sweeper", "verification"]
