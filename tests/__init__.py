"""
Test suite for bfx-wire-models

Contains:
- tests/unit/          : Unit tests for the wire engine, validators and entities
"""
