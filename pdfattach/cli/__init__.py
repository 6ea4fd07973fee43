"""Command line entry points for pdfattach."""
