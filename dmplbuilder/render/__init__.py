from .dmpl import DmplBuilder
from .svg import SvgBuilder

__all__ = [
    "DmplBuilder",
    "SvgBuilder",
]
