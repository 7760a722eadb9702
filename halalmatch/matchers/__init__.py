"""Matching logic for merchant and certification names."""
