"""Exception boundary — per-event failure isolation for a session."""
