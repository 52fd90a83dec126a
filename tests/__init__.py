"""
Unit Tests for pawn_engine

This package contains unit tests for all engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_evaluation.py

    # Run with coverage
    pytest tests/ --cov=pawn_engine --cov-report=html

    # Run specific test
    pytest tests/test_search.py::TestGreedySearch::test_depth_one_picks_best_static_child

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
