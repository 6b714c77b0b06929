"""
PWA K-matrix Test Suite.

Unit and integration tests for the two-stage amplitude evaluation:
- Stage 1: precalculate() caches the s-dependent pieces per event
- Stage 2: calculate() combines the cache with the production couplings

Test Files:
- test_barrier.py, test_phase_space.py: Blatt-Weisskopf and Chew-Mandelstam primitives
- test_engine.py: Tests for KMatrixEngine
- test_resonances.py: The literal resonance tables
- test_amplitude.py: Integration tests for KMatrixAmplitude

Usage:
    # Run all tests
    pytest tests/ -v

    # Run specific test file
    pytest tests/test_engine.py -v

    # Skip slow tests
    pytest tests/ -m "not slow" -v
"""
