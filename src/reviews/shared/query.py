"""Helpers for reading through Protean repositories."""

PAGE_SIZE = 100


def fetch_all(repo, **filters) -> list:
    """Return every record matching ``filters``, paging past the query limit.

    Pages are ordered by id so offsets stay stable on SQL providers.
    """
    items = []
    offset = 0
    while True:
        batch = repo._dao.query.filter(**filters).order_by("id").offset(offset).limit(PAGE_SIZE).all().items
        items.extend(batch)
        if len(batch) < PAGE_SIZE:
            return items
        offset += PAGE_SIZE
