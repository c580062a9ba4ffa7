"""Clients for the wizard's external collaborators."""
