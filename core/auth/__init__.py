"""Authentication for viewers holding a hosted backend session."""
