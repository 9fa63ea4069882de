"""Typed reconstruction of metadata records"""

from .base import CompleteParser, MinimalParser, Parser, decode_section, kind_of

__all__ = ["Parser", "MinimalParser", "CompleteParser", "decode_section", "kind_of"]
