"""Desktop simulator for the mood light."""
