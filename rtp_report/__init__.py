"""Monthly productivity reporting backend for hospital units."""
