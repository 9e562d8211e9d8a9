"""Use cases — the entry flows the CLI dispatches to."""
