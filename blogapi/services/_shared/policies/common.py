def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource (ids compared as strings)."""
    return actor_id is not None and str(actor_id) == str(owner_id)
