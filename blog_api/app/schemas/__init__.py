"""
Pydantic schema definitions for records and API payloads.
"""
