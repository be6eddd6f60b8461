"""
Test suite for portmanteau-criteria

Contains:
- tests/unit/          : Unit tests for individual modules
"""
