"""Dataset normalization and series queries."""
