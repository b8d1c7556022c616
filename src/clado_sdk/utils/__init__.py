"""Internal utilities for the Clado SDK."""
