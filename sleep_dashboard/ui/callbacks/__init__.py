"""Dash callback registration, one module per concern."""
