"""Core helpers shared across pdfattach."""
