"""Collaborator-facing orchestration over the game state machine."""
