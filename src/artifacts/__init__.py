"""Content-addressed storage for generated puzzles."""
