"""Board, ship and game-state domain model."""
