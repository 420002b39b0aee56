"""Discord bridge adapter."""
