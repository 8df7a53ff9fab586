"""Utility modules for the Token Launcher.

This package provides error types and input validation helpers.
"""
