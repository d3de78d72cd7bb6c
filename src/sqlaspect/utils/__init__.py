"""Shared utilities for sqlaspect."""
