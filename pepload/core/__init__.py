"""Shared type system for pepload: semantic types, values, errors and wire codec."""
