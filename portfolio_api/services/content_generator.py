"""
Template-based content generator and its local cache of generated items.

Public API
----------
ContentGenerator.generate(content_type, text)  -> GeneratedContent
ContentLibrary.load()                          -> List[GeneratedContent]
ContentLibrary.add(item)                       -> List[GeneratedContent]
ContentLibrary.remove(index)                   -> List[GeneratedContent]
ContentLibrary.clear()                         -> None

Generation sleeps for a fixed delay first so the caller sees the latency of a
"real" generator.  ``project_description`` picks one of two templates with the
injected random source; every other type is deterministic.
"""
from __future__ import annotations

import asyncio
import enum
import logging
import os
import random
from datetime import datetime
from typing import Callable, Dict, List, Optional

import aiofiles
from pydantic import BaseModel, TypeAdapter, ValidationError

from portfolio_api.utils.helpers import utcnow

logger = logging.getLogger(__name__)


class ContentType(str, enum.Enum):
    PROJECT_DESCRIPTION = "project_description"
    SKILL_ANALYSIS = "skill_analysis"
    RESUME_SECTION = "resume_section"
    COVER_LETTER = "cover_letter"


CONTENT_TITLES: Dict[ContentType, str] = {
    ContentType.PROJECT_DESCRIPTION: "Project Description",
    ContentType.SKILL_ANALYSIS: "Skill Analysis",
    ContentType.RESUME_SECTION: "Resume Section",
    ContentType.COVER_LETTER: "Cover Letter",
}


class GeneratedContent(BaseModel):
    type: ContentType
    title: str
    content: str
    timestamp: datetime


_CONTENT_LIST = TypeAdapter(List[GeneratedContent])


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

def _project_overview(text: str) -> str:
    return (
        f"**Project Overview:**\nA comprehensive {text} solution built with modern web "
        "technologies, featuring responsive design and intuitive user experience.\n\n"
        "**Key Features:**\n• User-friendly interface\n• Real-time data processing\n"
        "• Scalable architecture\n• Cross-platform compatibility\n\n"
        "**Technologies Used:**\n• Frontend: Angular, TypeScript, SCSS\n"
        "• Backend: Node.js, Express\n• Database: MongoDB\n• Deployment: Firebase, Docker"
    )


def _project_implementation(text: str) -> str:
    return (
        f"**{text} - Technical Implementation:**\n\nThis project demonstrates advanced "
        "full-stack development skills with a focus on performance and user experience.\n\n"
        "**Architecture:**\n• Microservices-based design\n• RESTful API implementation\n"
        "• Real-time communication\n• Cloud-native deployment\n\n"
        "**Achievements:**\n• 40% performance improvement\n• 99.9% uptime\n"
        "• 1000+ active users\n• 4.8/5 user rating"
    )


PROJECT_DESCRIPTION_TEMPLATES: List[Callable[[str], str]] = [
    _project_overview,
    _project_implementation,
]


def _skill_analysis(text: str) -> str:
    return (
        f"**{text.upper()} - Skill Analysis:**\n\n**Current Proficiency:** Advanced\n"
        "**Years of Experience:** 3+ years\n\n**Strengths:**\n"
        "• Deep understanding of core concepts\n• Experience with modern frameworks\n"
        "• Strong problem-solving abilities\n• Continuous learning mindset\n\n"
        "**Areas for Growth:**\n• Advanced optimization techniques\n• Emerging technologies\n"
        "• Leadership and mentoring\n• Industry best practices\n\n"
        f"**Recommended Learning Path:**\n1. Advanced {text} patterns\n"
        "2. Performance optimization\n3. Testing strategies\n4. Architecture design\n\n"
        "**Resources:**\n• Official documentation\n• Online courses\n• Community forums\n"
        "• Open source projects"
    )


def _resume_section(text: str) -> str:
    return (
        f"**{text} - Professional Experience:**\n\n"
        f"**Senior {text} Developer** | Company Name | 2021 - Present\n\n"
        f"• Led development of enterprise-level {text} applications serving 10,000+ users\n"
        "• Implemented modern development practices including CI/CD, automated testing, "
        "and code reviews\n"
        "• Collaborated with cross-functional teams to deliver high-quality software solutions\n"
        "• Mentored junior developers and conducted technical interviews\n"
        "• Reduced application load time by 50% through performance optimization\n\n"
        "**Key Achievements:**\n• Successfully delivered 15+ projects on time and within budget\n"
        "• Improved team productivity by 30% through process improvements\n"
        "• Contributed to open-source projects with 500+ GitHub stars\n"
        "• Presented technical solutions at 3 industry conferences"
    )


def _cover_letter(text: str, signature: str) -> str:
    return (
        f"**Cover Letter for {text} Position:**\n\nDear Hiring Manager,\n\n"
        f"I am writing to express my strong interest in the {text} position at your company. "
        "With over 5 years of experience in full-stack development and a passion for creating "
        "innovative solutions, I am confident that I would be a valuable addition to your team.\n\n"
        "**Why I'm a Great Fit:**\n• Proven track record of delivering high-quality software "
        "solutions\n• Strong technical skills in modern web technologies\n"
        "• Excellent problem-solving and communication abilities\n"
        "• Passionate about continuous learning and professional growth\n\n"
        f"**What I Can Bring:**\n• Expertise in {text} development\n"
        "• Experience with agile methodologies\n• Strong collaboration and leadership skills\n"
        "• Commitment to writing clean, maintainable code\n\n"
        "I am excited about the opportunity to contribute to your team and help drive "
        f"innovation in the {text} space. I would welcome the chance to discuss how my skills "
        f"and experience align with your needs.\n\nBest regards,\n[{signature}]"
    )


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class ContentGenerator:
    """Renders one of the fixed content templates for a piece of input text."""

    def __init__(
        self,
        signature: str,
        delay: float = 0.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.signature = signature
        self.delay = delay
        self.rng = rng or random.Random()

    async def generate(self, content_type: ContentType, text: str) -> GeneratedContent:
        content_type = ContentType(content_type)
        if self.delay > 0:
            await asyncio.sleep(self.delay)

        content = self.render(content_type, text)
        logger.info("Generated %s (%d chars)", content_type.value, len(content))
        return GeneratedContent(
            type=content_type,
            title=CONTENT_TITLES[content_type],
            content=content,
            timestamp=utcnow(),
        )

    def render(self, content_type: ContentType, text: str) -> str:
        if content_type is ContentType.PROJECT_DESCRIPTION:
            return self.rng.choice(PROJECT_DESCRIPTION_TEMPLATES)(text)
        if content_type is ContentType.SKILL_ANALYSIS:
            return _skill_analysis(text)
        if content_type is ContentType.RESUME_SECTION:
            return _resume_section(text)
        if content_type is ContentType.COVER_LETTER:
            return _cover_letter(text, self.signature)
        return "Generated content based on your input."


# ---------------------------------------------------------------------------
# Local cache
# ---------------------------------------------------------------------------

class ContentLibrary:
    """
    Newest-first list of generated items kept in a local JSON file.

    The file is read on every call; a missing, unreadable or malformed file
    counts as an empty library.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = asyncio.Lock()

    async def load(self) -> List[GeneratedContent]:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as fh:
                raw = await fh.read()
        except FileNotFoundError:
            return []
        except UnicodeDecodeError as exc:
            logger.warning("Discarding undecodable generated content cache %r: %s", self.path, exc)
            return []
        except OSError as exc:
            logger.warning("Could not read generated content cache %r: %s", self.path, exc)
            return []
        return self.decode(raw)

    def decode(self, raw: str) -> List[GeneratedContent]:
        """Parse cached JSON; anything malformed yields an empty list."""
        if not raw.strip():
            return []
        try:
            return _CONTENT_LIST.validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Discarding malformed generated content cache %r (%d errors)",
                self.path,
                exc.error_count(),
            )
            return []

    async def _save(self, items: List[GeneratedContent]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as fh:
            await fh.write(_CONTENT_LIST.dump_json(items, indent=2).decode("utf-8"))

    async def add(self, item: GeneratedContent) -> List[GeneratedContent]:
        async with self._lock:
            items = [item, *await self.load()]
            await self._save(items)
            return items

    async def remove(self, index: int) -> List[GeneratedContent]:
        """Delete the item at *index*; raises IndexError when out of range."""
        async with self._lock:
            items = await self.load()
            if not 0 <= index < len(items):
                raise IndexError(f"No generated content at index {index}")
            del items[index]
            await self._save(items)
            return items

    async def clear(self) -> None:
        async with self._lock:
            await self._save([])
