import math


def page_offset(page: int, limit: int) -> int:
    return (max(page, 1) - 1) * limit


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
