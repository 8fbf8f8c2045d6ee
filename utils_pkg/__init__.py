from .slug import slugify, unique_slug
from .similarity import name_similarity, best_name_match
from .numbers import parse_float, parse_int
from .pagination import page_offset, total_pages

__all__ = [
	"slugify",
	"unique_slug",
	"name_similarity",
	"best_name_match",
	"parse_float",
	"parse_int",
	"page_offset",
	"total_pages",
]
