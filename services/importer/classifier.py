def is_duplicate(adapter, candidate) -> bool:
    """True when an entity with the same key already exists in the candidate's campus.

    The key is the casefolded name (see EntityAdapter.key_of); geometry is not
    compared. Read-only.
    """
    return adapter.find_existing(candidate) is not None
