"""Monthly productivity aggregation engine."""
