"""Skill catalog and freelancer-skill endpoints."""

from uuid import UUID

from fastapi import APIRouter, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from routes.dependencies import SkillsServiceDep
from schemas import (
    ApiResponse,
    FreelancerSkillCreate,
    FreelancerSkillResponse,
    FreelancerSkillUpdate,
    SkillCreate,
    SkillResponse,
    SkillUpdate,
)

router = APIRouter(prefix="/skills", tags=["skills"])
freelancer_router = APIRouter(prefix="/freelancer-skills", tags=["skills"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[SkillResponse],
)
@limiter.limit(WRITE_LIMIT)
async def create_skill(
    request: Request, body: SkillCreate, service: SkillsServiceDep
) -> ApiResponse[SkillResponse]:
    skill = await service.create_skill(body)
    return ApiResponse(
        message="Skill created successfully", data=SkillResponse.model_validate(skill)
    )


@router.get("", response_model=ApiResponse[list[SkillResponse]])
async def list_skills(service: SkillsServiceDep) -> ApiResponse[list[SkillResponse]]:
    skills = await service.list_skills()
    return ApiResponse(
        message="Skills retrieved successfully",
        data=[SkillResponse.model_validate(s) for s in skills],
    )


@router.get("/{skill_id}", response_model=ApiResponse[SkillResponse])
async def get_skill(
    skill_id: UUID, service: SkillsServiceDep
) -> ApiResponse[SkillResponse]:
    skill = await service.get_skill(skill_id)
    return ApiResponse(
        message="Skill retrieved successfully",
        data=SkillResponse.model_validate(skill),
    )


@router.patch("/{skill_id}", response_model=ApiResponse[SkillResponse])
async def update_skill(
    skill_id: UUID, body: SkillUpdate, service: SkillsServiceDep
) -> ApiResponse[SkillResponse]:
    skill = await service.update_skill(skill_id, body)
    return ApiResponse(
        message="Skill updated successfully", data=SkillResponse.model_validate(skill)
    )


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_skill(skill_id: UUID, service: SkillsServiceDep) -> Response:
    await service.delete_skill(skill_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@freelancer_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[FreelancerSkillResponse],
    responses={409: {"description": "User already has this skill"}},
)
@limiter.limit(WRITE_LIMIT)
async def add_freelancer_skill(
    request: Request, body: FreelancerSkillCreate, service: SkillsServiceDep
) -> ApiResponse[FreelancerSkillResponse]:
    link = await service.add_freelancer_skill(body)
    return ApiResponse(
        message="Freelancer skill added successfully",
        data=FreelancerSkillResponse.model_validate(link),
    )


@freelancer_router.get("", response_model=ApiResponse[list[FreelancerSkillResponse]])
async def list_freelancer_skills(
    service: SkillsServiceDep, user_id: UUID | None = None
) -> ApiResponse[list[FreelancerSkillResponse]]:
    links = await service.list_freelancer_skills(user_id)
    return ApiResponse(
        message="Freelancer skills retrieved successfully",
        data=[FreelancerSkillResponse.model_validate(link) for link in links],
    )


@freelancer_router.get(
    "/{user_id}/{skill_id}",
    response_model=ApiResponse[FreelancerSkillResponse],
    responses={404: {"description": "User, skill or link not found"}},
)
async def get_freelancer_skill(
    user_id: UUID, skill_id: UUID, service: SkillsServiceDep
) -> ApiResponse[FreelancerSkillResponse]:
    link = await service.get_freelancer_skill(user_id, skill_id)
    return ApiResponse(
        message="Freelancer skill retrieved successfully",
        data=FreelancerSkillResponse.model_validate(link),
    )


@freelancer_router.patch(
    "/{user_id}/{skill_id}", response_model=ApiResponse[FreelancerSkillResponse]
)
async def update_freelancer_skill(
    user_id: UUID,
    skill_id: UUID,
    body: FreelancerSkillUpdate,
    service: SkillsServiceDep,
) -> ApiResponse[FreelancerSkillResponse]:
    link = await service.update_freelancer_skill(user_id, skill_id, body)
    return ApiResponse(
        message="Freelancer skill updated successfully",
        data=FreelancerSkillResponse.model_validate(link),
    )


@freelancer_router.delete(
    "/{user_id}/{skill_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_freelancer_skill(
    user_id: UUID, skill_id: UUID, service: SkillsServiceDep
) -> Response:
    await service.remove_freelancer_skill(user_id, skill_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
