class PersistenceError(Exception):
    """The database refused an order write; nothing from the attempt was kept."""
