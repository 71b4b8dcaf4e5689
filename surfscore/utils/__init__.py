"""Utilidades transversales."""
