"""PrintForge: choose exact card printings for decks."""
