"""
AI-tools endpoints: skill analyzer, project ideas and resume builder.

All three render fixed templates from the portfolio record; none of them
touches the database.
"""
import logging

from fastapi import APIRouter, Depends

from portfolio_api.dependencies.services import get_assistant
from portfolio_api.models.schemas import (
    ProjectIdeasRequest,
    ProjectIdeasResponse,
    ProjectRecommendationResponse,
    ResumeRequest,
    ResumeResponse,
    SkillAnalysisRequest,
    SkillAnalysisResponse,
)
from portfolio_api.services.assistant import AssistantService
from portfolio_api.utils.helpers import tokenize

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/skill-analysis", response_model=SkillAnalysisResponse)
async def analyze_skill(
    body: SkillAnalysisRequest,
    assistant: AssistantService = Depends(get_assistant),
) -> SkillAnalysisResponse:
    skill = body.skill.strip()
    analysis = assistant.generate_skill_analysis(skill)
    return SkillAnalysisResponse(
        title=f"{skill.upper()} Analysis",
        skill=analysis.skill,
        content=analysis.content,
        priority=analysis.priority,
    )


@router.post("/project-ideas", response_model=ProjectIdeasResponse)
async def project_ideas(
    body: ProjectIdeasRequest,
    assistant: AssistantService = Depends(get_assistant),
) -> ProjectIdeasResponse:
    """Suggest project ideas whose stack matches any token of the interests text."""
    keywords = tokenize(body.interests)
    ideas = assistant.generate_project_recommendations(keywords)
    return ProjectIdeasResponse(
        keywords=keywords,
        ideas=[ProjectRecommendationResponse.model_validate(idea) for idea in ideas],
    )


@router.post("/resume", response_model=ResumeResponse)
async def build_resume(
    body: ResumeRequest,
    assistant: AssistantService = Depends(get_assistant),
) -> ResumeResponse:
    job_description = body.job_description.strip()
    return ResumeResponse(
        resume=assistant.generate_resume_section(job_description),
        cover_letter=assistant.generate_cover_letter(job_description),
    )
