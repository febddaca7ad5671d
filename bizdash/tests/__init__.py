"""Test suite for the business dashboard backend."""
