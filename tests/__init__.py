"""
Test suite for expensebook core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
