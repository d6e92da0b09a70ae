"""
Gallery module.

Project grid filtering and ordering, the detail view, likes, and the
my-projects list.
"""

from openhouse.gallery.filters import (
    ProjectFilter,
    collect_vocabulary,
    filter_projects,
    order_projects,
)
from openhouse.gallery.likes import LikedProjects, LIKED_PROJECTS_KEY
from openhouse.gallery.views import Gallery, MyProjects, ProjectDetail, format_comment_date

__all__ = [
    "ProjectFilter",
    "collect_vocabulary",
    "filter_projects",
    "order_projects",
    "LikedProjects",
    "LIKED_PROJECTS_KEY",
    "Gallery",
    "MyProjects",
    "ProjectDetail",
    "format_comment_date",
]
