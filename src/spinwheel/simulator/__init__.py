"""Desktop simulator for the reward wheel."""
