"""Registry generator tests."""
