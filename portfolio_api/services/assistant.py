"""
Portfolio assistant: chat sessions, response generation and the AI-tools helpers.

Public API
----------
ChatSession(session_id)                               -> transcript holder
AssistantService.send_message(session, text)          -> ChatMessage (assistant reply)
AssistantService.respond(text)                        -> ResponseDraft
AssistantService.generate_skill_analysis(skill)       -> SkillAnalysis
AssistantService.generate_project_recommendations(kw) -> List[ProjectRecommendation]
AssistantService.generate_resume_section(text)        -> str
AssistantService.generate_cover_letter(text)          -> str

Nothing here calls a model.  Every reply is a fixed template filled from the
static portfolio record, selected by the rule-based classifier in
``portfolio_api.services.intents``.
"""
from __future__ import annotations

import asyncio
import dataclasses
import enum
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from portfolio_api.services.intents import Intent, IntentResult, analyze_intent, title_tokens
from portfolio_api.services.portfolio_data import PORTFOLIO, Portfolio, PortfolioProject
from portfolio_api.utils.helpers import utcnow

logger = logging.getLogger(__name__)


WELCOME_TEXT = (
    "Hi! I'm your AI portfolio assistant. I can help you explore my projects, "
    "analyze skills, recommend learning paths, or answer questions about my "
    "experience. What would you like to know?"
)
APOLOGY_TEXT = "I'm sorry, I encountered an error. Please try again or rephrase your question."


# ---------------------------------------------------------------------------
# Transcript types
# ---------------------------------------------------------------------------

class MessageType(str, enum.Enum):
    TEXT = "text"
    PROJECT_RECOMMENDATION = "project_recommendation"
    SKILL_ANALYSIS = "skill_analysis"
    ERROR = "error"


@dataclasses.dataclass
class ChatMessage:
    id: str
    content: str
    is_user: bool
    timestamp: datetime
    type: MessageType = MessageType.TEXT
    metadata: Optional[Dict[str, Any]] = None


@dataclasses.dataclass
class ResponseDraft:
    """Assistant reply before it is stamped with an id and timestamp."""

    content: str
    type: MessageType = MessageType.TEXT
    metadata: Optional[Dict[str, Any]] = None


@dataclasses.dataclass
class ProjectRecommendation:
    title: str
    description: str
    technologies: List[str]
    reason: str
    match_score: int


@dataclasses.dataclass
class SkillAnalysis:
    skill: str
    content: str
    priority: str  # high | medium | low


class ChatSession:
    """
    One independent chat transcript.

    The transcript is replaced wholesale on every append, so a reader holding a
    previous ``messages`` list never sees it change underneath.
    """

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self.created_at = utcnow()
        self.is_typing = False
        self.messages: List[ChatMessage] = []
        self._next_id = 1
        self.reset()

    def reset(self) -> None:
        """Drop the transcript and start again from the welcome message."""
        self._next_id = 1
        self.messages = []
        self._append(ResponseDraft(content=WELCOME_TEXT), is_user=False)

    def append_user(self, content: str) -> ChatMessage:
        return self._append(ResponseDraft(content=content), is_user=True)

    def append_assistant(self, draft: ResponseDraft) -> ChatMessage:
        return self._append(draft, is_user=False)

    def _append(self, draft: ResponseDraft, *, is_user: bool) -> ChatMessage:
        timestamp = utcnow()
        if self.messages and timestamp < self.messages[-1].timestamp:
            timestamp = self.messages[-1].timestamp

        message = ChatMessage(
            id=str(self._next_id),
            content=draft.content,
            is_user=is_user,
            timestamp=timestamp,
            type=draft.type,
            metadata=draft.metadata,
        )
        self._next_id += 1
        self.messages = [*self.messages, message]
        return message


# ---------------------------------------------------------------------------
# Fixed content tables
# ---------------------------------------------------------------------------

_SKILL_ANALYSES: Dict[str, Dict[str, str]] = {
    "angular": {
        "content": (
            "**Current Level**: Advanced\n"
            "**Strengths**: Component architecture, RxJS, state management\n"
            "**Areas for Growth**: Angular Universal, Micro-frontends\n"
            "**Resources**: Angular documentation, NgRx tutorials"
        ),
        "priority": "high",
    },
    "react": {
        "content": (
            "**Current Level**: Intermediate\n"
            "**Strengths**: Hooks, Context API, component composition\n"
            "**Areas for Growth**: Server Components, Concurrent features\n"
            "**Resources**: React 18 docs, Next.js tutorials"
        ),
        "priority": "medium",
    },
    "ai": {
        "content": (
            "**Current Level**: Learning\n"
            "**Strengths**: Basic ML concepts, API integration\n"
            "**Areas for Growth**: Deep learning, model training\n"
            "**Resources**: TensorFlow tutorials, OpenAI docs"
        ),
        "priority": "high",
    },
}

_PROJECT_IDEAS: List[ProjectRecommendation] = [
    ProjectRecommendation(
        title="AI-Powered E-commerce",
        description="E-commerce platform with AI recommendations and chatbot",
        technologies=["Angular", "Node.js", "OpenAI", "MongoDB"],
        reason="Combines your interest in AI with e-commerce",
        match_score=95,
    ),
    ProjectRecommendation(
        title="Real-time Analytics Dashboard",
        description="Dashboard with real-time data visualization and AI insights",
        technologies=["React", "D3.js", "WebSocket", "Python"],
        reason="Perfect for data visualization and AI integration",
        match_score=88,
    ),
    ProjectRecommendation(
        title="Smart Portfolio Generator",
        description="AI-powered portfolio generator with dynamic content",
        technologies=["Angular", "OpenAI", "Firebase", "TypeScript"],
        reason="Leverages AI for content generation",
        match_score=92,
    ),
]

MAX_RECOMMENDATIONS = 3


def _project_line(project: PortfolioProject, with_tech: bool = True) -> str:
    line = f"• **{project.title}**: {project.description}"
    if with_tech:
        line += f" ({', '.join(project.technologies)})"
    return line


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class AssistantService:
    """Template-driven responder bound to one portfolio record."""

    def __init__(self, portfolio: Portfolio = PORTFOLIO, response_delay: float = 0.0) -> None:
        self.portfolio = portfolio
        self.response_delay = response_delay
        self._handlers: Dict[Intent, Callable[[str, IntentResult], ResponseDraft]] = {
            Intent.PROJECT_INQUIRY: self._handle_project_inquiry,
            Intent.SKILL_ANALYSIS: self._handle_skill_analysis,
            Intent.SKILLS_QUESTION: self._handle_skills_question,
            Intent.EXPERIENCE_QUESTION: self._handle_experience_question,
            Intent.PROJECT_DETAILS: self._handle_project_details,
            Intent.PROJECT_RECOMMENDATION: self._handle_project_recommendation,
            Intent.GENERAL_QUESTION: self._handle_general_question,
        }

    # -- chat ---------------------------------------------------------------

    async def send_message(self, session: ChatSession, text: str) -> ChatMessage:
        """
        Append the user's message, then the assistant's reply, to *session*.

        Generation failures never escape: they are logged and turned into a
        single ``error`` message carrying the fixed apology text.
        """
        session.append_user(text)

        try:
            if self.response_delay > 0:
                await asyncio.sleep(self.response_delay)
            draft = self.respond(text)
        except Exception as exc:
            logger.error(
                "Assistant failed for session %s: %s", session.session_id, exc, exc_info=True
            )
            draft = ResponseDraft(content=APOLOGY_TEXT, type=MessageType.ERROR)

        return session.append_assistant(draft)

    def respond(self, text: str) -> ResponseDraft:
        """Classify *text* and render the matching template."""
        result = analyze_intent(text, self.portfolio)
        logger.debug("Intent %s keywords=%s", result.intent.value, result.keywords)
        handler = self._handlers.get(result.intent, self._handle_general_question)
        return handler(text, result)

    def _handle_project_inquiry(self, text: str, result: IntentResult) -> ResponseDraft:
        relevant = [
            project
            for project in self.portfolio.projects
            if any(
                keyword in tech.lower()
                for keyword in result.keywords
                for tech in project.technologies
            )
        ]

        if relevant:
            project_list = "\n".join(_project_line(p) for p in relevant)
            content = (
                f"Based on your interest in {', '.join(result.keywords)}, here are some "
                f"relevant projects:\n\n{project_list}\n\n"
                "Would you like to know more about any specific project?"
            )
        else:
            relevant = list(self.portfolio.projects)
            project_list = "\n".join(_project_line(p) for p in relevant)
            content = f"Here are all my projects:\n\n{project_list}\n\nWhich one interests you most?"

        return ResponseDraft(
            content=content,
            type=MessageType.PROJECT_RECOMMENDATION,
            metadata={"projects": [dataclasses.asdict(p) for p in relevant]},
        )

    def _handle_skill_analysis(self, text: str, result: IntentResult) -> ResponseDraft:
        mentioned = [
            keyword
            for keyword in result.keywords
            if any(keyword in skill.lower() for skill in self.portfolio.skills)
        ]

        if not mentioned:
            return ResponseDraft(
                content=(
                    f"I have experience with: {', '.join(self.portfolio.skills)}\n\n"
                    "Which skill would you like me to analyze or discuss?"
                )
            )

        analysis = self.generate_skill_analysis(mentioned[0])
        return ResponseDraft(
            content=f"**{mentioned[0].upper()} Analysis:**\n\n{analysis.content}",
            type=MessageType.SKILL_ANALYSIS,
            metadata={"analysis": dataclasses.asdict(analysis)},
        )

    def _handle_project_recommendation(self, text: str, result: IntentResult) -> ResponseDraft:
        recommendations = self.generate_project_recommendations(result.keywords)

        if recommendations:
            body = "\n\n".join(
                f"• **{rec.title}**: {rec.description}\n"
                f"  *Why: {rec.reason}*\n"
                f"  *Match: {rec.match_score}%*"
                for rec in recommendations
            )
        else:
            body = (
                "Tell me which technologies interest you (for example Angular, React "
                "or Python) and I'll suggest a matching project."
            )

        return ResponseDraft(
            content=f"**Project Recommendations:**\n\n{body}",
            type=MessageType.PROJECT_RECOMMENDATION,
            metadata={"recommendations": [dataclasses.asdict(r) for r in recommendations]},
        )

    def _handle_skills_question(self, text: str, result: IntentResult) -> ResponseDraft:
        return ResponseDraft(
            content=(
                f"My core skills include: {', '.join(self.portfolio.skills)}.\n\n"
                "You can ask for an analysis of any skill to see strengths, growth "
                "areas, and resources."
            )
        )

    def _handle_experience_question(self, text: str, result: IntentResult) -> ResponseDraft:
        return ResponseDraft(
            content=(
                f"I have {self.portfolio.experience} of professional experience as a "
                f"{self.portfolio.title}."
            )
        )

    def _handle_project_details(self, text: str, result: IntentResult) -> ResponseDraft:
        lower = text.lower()
        # Projects ranked by how many of their title tokens appear in the message.
        # Single-letter tokens count too, so "e" from "E-Commerce" matches
        # almost any text: a details request naming no project gets that one.
        scored = sorted(
            (
                (sum(1 for token in title_tokens(p.title) if token in lower), p)
                for p in self.portfolio.projects
            ),
            key=lambda pair: pair[0],
            reverse=True,
        )

        if scored and scored[0][0] > 0:
            project = scored[0][1]
            return ResponseDraft(
                content=(
                    f"**{project.title}**\n{project.description}\n\n"
                    f"Technologies: {', '.join(project.technologies)}\n\n"
                    "Would you like to know about challenges, architecture, or results?"
                ),
                metadata={"project": dataclasses.asdict(project)},
            )

        project_list = "\n".join(_project_line(p, with_tech=False) for p in self.portfolio.projects)
        return ResponseDraft(
            content=(
                f"I couldn't identify the project. Here are my projects:\n\n{project_list}\n\n"
                "Please mention the project name for details."
            ),
            metadata={"projects": [dataclasses.asdict(p) for p in self.portfolio.projects]},
        )

    def _handle_general_question(self, text: str, result: IntentResult) -> ResponseDraft:
        p = self.portfolio
        first_title = p.projects[0].title if p.projects else "a project"
        return ResponseDraft(
            content=(
                f"I'm a {p.title} with {p.experience}.\n"
                f"Skills: {', '.join(p.skills)}.\n"
                f"Projects include {', '.join(pr.title for pr in p.projects)}.\n"
                f'Ask me: "What are your skills?", "Tell me about {first_title}", '
                'or "How many years of experience do you have?"'
            )
        )

    # -- tools --------------------------------------------------------------

    def generate_skill_analysis(self, skill: str) -> SkillAnalysis:
        """Fixed analysis for known skills, a generic "continuously learning" one otherwise."""
        entry = _SKILL_ANALYSES.get(skill.lower())
        if entry is None:
            return SkillAnalysis(
                skill=skill,
                content=(
                    f"I'm continuously learning and improving my {skill} skills. "
                    "What specific aspect would you like to discuss?"
                ),
                priority="medium",
            )
        return SkillAnalysis(skill=skill, content=entry["content"], priority=entry["priority"])

    def generate_project_recommendations(self, keywords: List[str]) -> List[ProjectRecommendation]:
        """Idea records with a technology containing any keyword, at most three."""
        lowered = [k.lower() for k in keywords if k]
        matches = [
            dataclasses.replace(idea, technologies=list(idea.technologies))
            for idea in _PROJECT_IDEAS
            if any(keyword in tech.lower() for keyword in lowered for tech in idea.technologies)
        ]
        return matches[:MAX_RECOMMENDATIONS]

    def generate_resume_section(self, job_description: str = "") -> str:
        p = self.portfolio
        summary = (
            f"Professional Summary\n{p.title} with {p.experience}. "
            f"Focus: {', '.join(p.skills[:5])}."
        )
        achievements = "Key Achievements\n" + "\n".join(
            f"- {verb} {project.title}"
            for verb, project in zip(("Built", "Created"), p.projects)
        )
        tailored = f"\nTarget Role Context\n- {job_description}" if job_description else ""
        return f"{summary}\n\n{achievements}{tailored}"

    def generate_cover_letter(self, job_description: str = "") -> str:
        p = self.portfolio
        body = (
            f"I am excited to apply for this opportunity. As a {p.title} with "
            f"{p.experience}, I have delivered projects such as "
            f"{', '.join(project.title for project in p.projects)} using "
            f"{', '.join(p.skills)}."
        )
        fit = (
            f"\n\nAlignment\nYour description mentions: {job_description}. "
            "My background aligns strongly with these requirements."
            if job_description
            else ""
        )
        return f"Dear Hiring Manager,\n\n{body}{fit}\n\nSincerely,\n{p.name}"
