"""Shared CLI building blocks: context, options, output and error handling."""
