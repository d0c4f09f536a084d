"""PyTerm — a simulated command shell over an in-memory filesystem."""
