"""Resource management service package."""
