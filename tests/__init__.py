"""Test suite for the QBI header compiler.

Test Structure:
- domain/: Tests for parsing, layout, compilation and validation services
- config/: Tests for configuration management
- infrastructure/: Tests for logging and progress tracking
- generators/: Tests for registry generation
- utils/: Tests for contract key and path helpers
- test_cli.py: End-to-end command line tests

Run tests with pytest:
    pytest                    # Run all tests
    pytest -m unit            # Run unit tests only
    pytest -m integration     # Run file system and CLI tests only
"""
