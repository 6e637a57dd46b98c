"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the coffee ledger.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. test_sequencing.py - Consecutive, gap-free transaction ids and append-only log
2. test_balances.py - Balances never decrease and equal the sum of credits
3. test_atomicity.py - A failed brew leaves no trace
4. test_determinism.py - Seeded sessions replay exactly
5. test_unlocks.py - One-time achievement unlocks

These tests use hypothesis for property-based testing.
"""
