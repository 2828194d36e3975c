"""Mock authentication: one scoped session holding the active user."""
