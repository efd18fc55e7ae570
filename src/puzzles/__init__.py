"""Puzzle implementations."""
