"""Domain layer: slots, vehicles, tickets and the slot pool aggregate."""
