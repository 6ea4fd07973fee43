"""PDF/A attach-and-convert plugin."""
