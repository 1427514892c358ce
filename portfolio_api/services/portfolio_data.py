"""
Static portfolio record.

Every assistant response, tool output and export is rendered from this record.
It never changes at runtime; callers that need to hand it out get a deep copy
from :func:`get_portfolio`.
"""
from __future__ import annotations

import copy
import dataclasses
from typing import Any, Dict, List


@dataclasses.dataclass(frozen=True)
class PortfolioProject:
    title: str
    technologies: List[str]
    description: str


@dataclasses.dataclass(frozen=True)
class Portfolio:
    name: str
    title: str
    skills: List[str]
    experience: str
    projects: List[PortfolioProject]
    interests: List[str]

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form, keys in declaration order (used by the JSON export)."""
        return dataclasses.asdict(self)


PORTFOLIO = Portfolio(
    name="Raghav Bharadwaj",
    title="Full Stack Developer",
    skills=["Angular", "React", "Node.js", "TypeScript", "Firebase", "Python", "AI/ML"],
    experience="5+ years",
    projects=[
        PortfolioProject(
            title="E-Commerce Platform",
            technologies=["Angular", "Firebase", "Stripe"],
            description="Full-featured e-commerce solution",
        ),
        PortfolioProject(
            title="AI-Powered Portfolio",
            technologies=["Angular", "OpenAI", "Firebase"],
            description="Interactive portfolio with AI assistant",
        ),
    ],
    interests=["Web Development", "AI/ML", "Cloud Computing", "Open Source"],
)


def get_portfolio() -> Portfolio:
    """Return an independent copy of the portfolio record."""
    return copy.deepcopy(PORTFOLIO)
