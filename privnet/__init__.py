"""Private network lifecycle and instance membership reconciliation."""
