"""
Gallery filtering and ordering.

Filtering is a pure predicate over two selections:
- tags: a project matches if it carries ANY selected tag
- departments: a project matches if its department is selected
Both categories must match; an empty selection matches everything.

Ordering is a seeded shuffle: the same seed and input always produce the
same order, so a gallery renders identically until its session changes.
"""

from dataclasses import dataclass, field
import random
from typing import Iterable, List, Set, Tuple

from openhouse.models.project import Project


@dataclass
class ProjectFilter:
    """
    Selected tags and departments.
    
    Attributes:
        tags: Selected tags (OR within the category).
        departments: Selected departments (OR within the category).
    """
    tags: Set[str] = field(default_factory=set)
    departments: Set[str] = field(default_factory=set)
    
    def matches(self, project: Project) -> bool:
        matches_tags = not self.tags or any(tag in self.tags for tag in project.tags)
        matches_department = not self.departments or project.department in self.departments
        return matches_tags and matches_department
    
    def toggle_tag(self, tag: str) -> None:
        """Select tag if unselected, otherwise unselect it."""
        if tag in self.tags:
            self.tags.discard(tag)
        else:
            self.tags.add(tag)
    
    def toggle_department(self, department: str) -> None:
        if department in self.departments:
            self.departments.discard(department)
        else:
            self.departments.add(department)
    
    def clear(self) -> None:
        self.tags.clear()
        self.departments.clear()
    
    @property
    def is_empty(self) -> bool:
        return not self.tags and not self.departments


def filter_projects(projects: Iterable[Project], selection: ProjectFilter) -> List[Project]:
    """Projects matching selection, in input order."""
    return [project for project in projects if selection.matches(project)]


def collect_vocabulary(projects: Iterable[Project]) -> Tuple[List[str], List[str]]:
    """
    Collect every tag and department present in projects.
    
    Returns:
        (tags, departments), each de-duplicated in first-seen order.
    """
    tags: dict = {}
    departments: dict = {}
    for project in projects:
        for tag in project.tags:
            tags.setdefault(tag, None)
        if project.department:
            departments.setdefault(project.department, None)
    return list(tags), list(departments)


def order_projects(projects: Iterable[Project], seed: int) -> List[Project]:
    """
    Shuffle projects deterministically.
    
    Args:
        projects: Projects in fetch order.
        seed: Shuffle seed; equal seeds give equal orders for equal input.
        
    Returns:
        New list; the input is not modified.
    """
    ordered = list(projects)
    random.Random(seed).shuffle(ordered)
    return ordered
