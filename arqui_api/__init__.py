"""Quote pricing API for architecture projects."""
