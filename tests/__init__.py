"""
Test suite for share-vault-executor

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/scenarios/     : Scenario tests (donation / ratio skew between quote and execution)
"""
