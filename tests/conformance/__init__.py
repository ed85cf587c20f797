"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the token ledger.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. conservation.py - sum of balances equals total supply, within the cap
2. atomicity.py - failed calls and failed batches change nothing
3. determinism.py - identical call sequences produce identical state

These tests use hypothesis for property-based testing.
"""
