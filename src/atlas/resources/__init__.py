"""Resource module exports."""

from .organizations import Organizations
from .projections import Projections
from .projects import Projects
from .tags import Tags
from .users import Users

__all__ = [
    "Organizations",
    "Projections",
    "Projects",
    "Tags",
    "Users",
]
