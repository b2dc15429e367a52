"""Armada naval-combat game engine."""
