"""Base layer: value model, error taxonomy, streaming protocol and shared infrastructure."""
