"""Save/load of game snapshots keyed by player nickname."""
