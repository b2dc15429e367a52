"""Game rules, opponent strategy, persistence and application services."""
