"""Record store implementations for user data."""
