"""Query helpers; callers own the transaction and commit."""
