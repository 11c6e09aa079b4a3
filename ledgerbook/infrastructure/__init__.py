"""Infrastructure adapters: database, store, identity, settings, logging."""
