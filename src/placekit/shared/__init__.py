"""Shared utilities for placekit: errors, logging, constants, models and protocols."""
