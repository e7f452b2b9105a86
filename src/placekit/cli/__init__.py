"""Command line interface for placekit."""
