"""Adapters implementing the attrcache ports."""
