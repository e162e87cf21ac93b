"""Utility functions for the stencilkit package."""
