"""Test suite for jsonnav."""
