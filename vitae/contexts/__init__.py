"""Bounded contexts of VITAE."""
