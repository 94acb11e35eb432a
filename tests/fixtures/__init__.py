"""Shared builders for package signing tests."""
