"""CLI module for researchbot."""
