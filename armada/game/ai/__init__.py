"""Automated opponent strategies."""
