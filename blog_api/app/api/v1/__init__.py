"""
Version 1 of the API.

This subpackage bundles the user and post endpoints.
"""
