"""Layout builders for the Dash UI."""
