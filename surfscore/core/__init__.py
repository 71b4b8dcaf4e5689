"""Tipos compartidos del núcleo."""
