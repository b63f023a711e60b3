"""Exceptions raised by the energy analytics engine."""
