"""Tests for the assistant service and chat sessions (no HTTP)."""
import pytest

from portfolio_api.services.assistant import (
    APOLOGY_TEXT,
    WELCOME_TEXT,
    AssistantService,
    ChatSession,
    MessageType,
    ResponseDraft,
)


class _BrokenAssistant(AssistantService):
    def respond(self, text: str) -> ResponseDraft:
        raise RuntimeError("template lookup failed")


@pytest.fixture
def assistant() -> AssistantService:
    return AssistantService()


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

def test_new_session_starts_with_welcome_message():
    session = ChatSession("s1")
    assert len(session.messages) == 1
    welcome = session.messages[0]
    assert welcome.content == WELCOME_TEXT
    assert welcome.is_user is False
    assert welcome.type is MessageType.TEXT


@pytest.mark.asyncio
async def test_user_message_precedes_reply(assistant: AssistantService):
    session = ChatSession("s1")
    reply = await assistant.send_message(session, "What are your skills?")

    assert [m.is_user for m in session.messages] == [False, True, False]
    assert session.messages[1].content == "What are your skills?"
    assert session.messages[-1] is reply


@pytest.mark.asyncio
async def test_message_ids_unique_and_timestamps_non_decreasing(assistant: AssistantService):
    session = ChatSession("s1")
    for text in ("hi", "What are your skills?", "recommend a project", "tell me about angular"):
        await assistant.send_message(session, text)

    ids = [m.id for m in session.messages]
    assert len(ids) == len(set(ids))
    stamps = [m.timestamp for m in session.messages]
    assert stamps == sorted(stamps)


@pytest.mark.asyncio
async def test_reset_leaves_only_welcome(assistant: AssistantService):
    session = ChatSession("s1")
    for _ in range(3):
        await assistant.send_message(session, "hello")
    assert len(session.messages) == 7

    session.reset()
    assert len(session.messages) == 1
    assert session.messages[0].content == WELCOME_TEXT
    assert session.messages[0].is_user is False


@pytest.mark.asyncio
async def test_sessions_are_independent(assistant: AssistantService):
    first, second = ChatSession("a"), ChatSession("b")
    await assistant.send_message(first, "hello")
    assert len(first.messages) == 3
    assert len(second.messages) == 1


@pytest.mark.asyncio
async def test_generation_failure_becomes_apology():
    session = ChatSession("s1")
    reply = await _BrokenAssistant().send_message(session, "What are your skills?")

    assert reply.type is MessageType.ERROR
    assert reply.content == APOLOGY_TEXT
    assert session.messages[1].content == "What are your skills?"
    assert len(session.messages) == 3


# ---------------------------------------------------------------------------
# Responses per intent
# ---------------------------------------------------------------------------

def test_skills_question(assistant: AssistantService):
    draft = assistant.respond("What are your skills?")
    assert draft.content.startswith("My core skills include: Angular, React, Node.js")
    assert draft.type is MessageType.TEXT


def test_experience_question(assistant: AssistantService):
    draft = assistant.respond("How many years of experience do you have?")
    assert draft.content == (
        "I have 5+ years of professional experience as a Full Stack Developer."
    )


def test_project_details_picks_named_project(assistant: AssistantService):
    draft = assistant.respond("Tell me about E-Commerce Platform")
    assert draft.content.startswith("**E-Commerce Platform**\n")
    assert "Technologies: Angular, Firebase, Stripe" in draft.content
    assert draft.metadata["project"]["title"] == "E-Commerce Platform"


def test_project_details_single_letter_title_tokens_count(assistant: AssistantService):
    # "e" from "E-Commerce" occurs in the message, no AI-Powered Portfolio token does
    draft = assistant.respond("tell me about angular")
    assert draft.content.startswith("**E-Commerce Platform**\n")
    assert draft.metadata["project"]["title"] == "E-Commerce Platform"


def test_project_inquiry_filters_by_technology(assistant: AssistantService):
    draft = assistant.respond("Show me your firebase work")
    assert draft.type is MessageType.PROJECT_RECOMMENDATION
    titles = [p["title"] for p in draft.metadata["projects"]]
    assert titles == ["E-Commerce Platform", "AI-Powered Portfolio"]
    assert draft.content.startswith("Based on your interest in firebase")


def test_project_inquiry_without_keywords_lists_everything(assistant: AssistantService):
    draft = assistant.respond("Show me your work")
    assert draft.content.startswith("Here are all my projects:")
    assert len(draft.metadata["projects"]) == 2


def test_skill_analysis_for_known_skill(assistant: AssistantService):
    draft = assistant.respond("How can I improve in React?")
    assert draft.type is MessageType.SKILL_ANALYSIS
    assert draft.content.startswith("**REACT Analysis:**")
    assert "**Current Level**: Intermediate" in draft.content


def test_skill_analysis_without_known_skill_lists_skills(assistant: AssistantService):
    draft = assistant.respond("I want to learn")
    assert draft.type is MessageType.TEXT
    assert draft.content.startswith("I have experience with: Angular, React")


def test_recommendation_lists_matching_ideas(assistant: AssistantService):
    draft = assistant.respond("suggest something with python")
    recs = draft.metadata["recommendations"]
    assert [r["title"] for r in recs] == ["Real-time Analytics Dashboard"]
    assert "*Match: 88%*" in draft.content


def test_recommendation_without_keywords(assistant: AssistantService):
    draft = assistant.respond("recommend a project")
    assert draft.type is MessageType.PROJECT_RECOMMENDATION
    assert draft.metadata["recommendations"] == []
    assert draft.content.startswith("**Project Recommendations:**")


def test_general_question_fallback(assistant: AssistantService):
    draft = assistant.respond("hello there")
    assert draft.content.startswith("I'm a Full Stack Developer with 5+ years.")
    assert 'Tell me about E-Commerce Platform' in draft.content


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

def test_skill_analysis_known_template(assistant: AssistantService):
    analysis = assistant.generate_skill_analysis("angular")
    assert analysis.priority == "high"
    assert analysis.content.startswith("**Current Level**: Advanced")


def test_skill_analysis_lookup_is_case_insensitive(assistant: AssistantService):
    assert assistant.generate_skill_analysis("Angular").content.startswith(
        "**Current Level**: Advanced"
    )


def test_skill_analysis_fallback_interpolates_name(assistant: AssistantService):
    analysis = assistant.generate_skill_analysis("cobol")
    assert analysis.priority == "medium"
    assert analysis.content == (
        "I'm continuously learning and improving my cobol skills. "
        "What specific aspect would you like to discuss?"
    )


def test_recommendations_capped_and_matched(assistant: AssistantService):
    ideas = assistant.generate_project_recommendations(["angular", "react", "python"])
    assert len(ideas) == 3
    assert [i.title for i in assistant.generate_project_recommendations(["d3.js"])] == [
        "Real-time Analytics Dashboard"
    ]
    assert assistant.generate_project_recommendations([]) == []


def test_resume_section(assistant: AssistantService):
    resume = assistant.generate_resume_section("Senior Angular role")
    assert resume.startswith("Professional Summary\nFull Stack Developer with 5+ years.")
    assert "- Built E-Commerce Platform\n- Created AI-Powered Portfolio" in resume
    assert resume.endswith("Target Role Context\n- Senior Angular role")
    assert "Target Role Context" not in assistant.generate_resume_section("")


def test_cover_letter(assistant: AssistantService):
    letter = assistant.generate_cover_letter("")
    assert letter.startswith("Dear Hiring Manager,\n\n")
    assert letter.endswith("Sincerely,\nRaghav Bharadwaj")
    assert "Alignment" not in letter
    assert "Your description mentions: Python APIs." in assistant.generate_cover_letter("Python APIs")
