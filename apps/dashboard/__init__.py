"""Dashboard app: per-user summaries for travelers and hosts."""
