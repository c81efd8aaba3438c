"""
Core wire transform engine, field validators, and entity models.

This module contains the building blocks that are independent of the
transport layer delivering raw wire arrays.
"""
