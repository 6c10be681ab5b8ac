"""
API endpoints for job postings and applications.
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth.dependencies import get_current_user
from ...core.pagination import PageParams
from ...crud import job as job_crud
from ...db.models.user import User
from ...db.session import get_db
from ...schemas.common import ApiResponse
from ...schemas.job import (
    Applicant,
    ApplicantStatusUpdate,
    EmploymentType,
    ExperienceLevel,
    JobCreate,
    JobOut,
    JobUpdate,
)
from ..dependencies import ERROR_RESPONSES, empty_response, list_response, page_response, pagination_params

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=ApiResponse[List[JobOut]])
async def get_jobs(
    title: Optional[str] = Query(None, description="Case-insensitive substring of the title"),
    location: Optional[str] = Query(None, description="Case-insensitive substring of the location"),
    employment_type: Optional[EmploymentType] = Query(None),
    experience_level: Optional[ExperienceLevel] = Query(None),
    params: PageParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Active job postings, newest first."""
    jobs, total = await job_crud.list_jobs(
        db,
        offset=params.offset,
        limit=params.limit,
        title=title,
        location=location,
        employment_type=employment_type,
        experience_level=experience_level,
    )
    return page_response(jobs, total, params)


@router.post("", response_model=ApiResponse[JobOut], status_code=status.HTTP_201_CREATED)
async def create_job(
    job_in: JobCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    job = await job_crud.create_job(db, current_user.id, job_in)
    return {"success": True, "data": job}


@router.get("/{job_id}", response_model=ApiResponse[JobOut])
async def get_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    job = await job_crud.get_job_or_404(db, job_id)
    return {"success": True, "data": job}


@router.put("/{job_id}", response_model=ApiResponse[JobOut])
async def update_job(
    job_id: UUID,
    job_in: JobUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    job = await job_crud.update_job(db, current_user.id, job_id, job_in)
    return {"success": True, "data": job}


@router.delete("/{job_id}", response_model=ApiResponse[dict])
async def delete_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await job_crud.delete_job(db, current_user.id, job_id)
    return empty_response()


@router.post("/{job_id}/apply", response_model=ApiResponse[JobOut])
async def apply_for_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    job = await job_crud.apply(db, current_user.id, job_id)
    return {"success": True, "data": job}


@router.get("/{job_id}/applicants", response_model=ApiResponse[List[Applicant]])
async def get_applicants(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Applicants of a job; only its owner may see them."""
    applicants = await job_crud.get_applicants(db, current_user.id, job_id)
    return list_response(applicants)


@router.put("/{job_id}/applicants/{user_id}", response_model=ApiResponse[Applicant])
async def update_applicant_status(
    job_id: UUID,
    user_id: UUID,
    payload: ApplicantStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    entry = await job_crud.update_applicant_status(db, current_user.id, job_id, user_id, payload.status)
    return {"success": True, "data": entry}
