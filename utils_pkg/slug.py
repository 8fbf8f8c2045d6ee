import re


def slugify(name: str) -> str:
    """Lowercase, collapse every run of non-alphanumerics to '-', strip edge dashes."""
    slug = re.sub(r'[^a-z0-9]+', '-', (name or '').lower())
    return slug.strip('-') or 'item'


def unique_slug(name: str, exists) -> str:
    """Return slugify(name), suffixed with -1, -2, ... until `exists(slug)` is False."""
    base = slugify(name)
    slug = base
    counter = 1
    while exists(slug):
        slug = f"{base}-{counter}"
        counter += 1
    return slug
