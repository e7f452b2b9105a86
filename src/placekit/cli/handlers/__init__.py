"""Command handlers invoked by the typer app."""
