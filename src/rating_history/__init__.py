"""Rating history aggregation and windowing for player rating charts."""
