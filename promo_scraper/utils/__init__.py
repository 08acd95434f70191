from .environment import ConfigManager, Logger
from .pricing import calculate_discount, format_price, parse_aria_label_price, parse_price
from .stores import get_hostname, get_store_name
from .text import clean_title, normalize_image_url

__all__ = [
    "ConfigManager",
    "Logger",
    "calculate_discount",
    "format_price",
    "parse_aria_label_price",
    "parse_price",
    "get_hostname",
    "get_store_name",
    "clean_title",
    "normalize_image_url",
]
