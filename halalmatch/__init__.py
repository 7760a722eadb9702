"""Halal certification matching for merchant directories."""
