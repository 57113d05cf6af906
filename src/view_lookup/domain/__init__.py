"""Domain layer - detail negotiation and template lookup logic."""
