"""
CRUD operations for job postings and their applicants.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import String, cast, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import BadRequestError, ConflictError, NotFoundError
from ..core.permissions import ensure_owner
from ..db.base import utcnow
from ..db.models.job import Job
from ..schemas.job import JobCreate, JobUpdate

logger = logging.getLogger(__name__)


async def get_job(db: AsyncSession, job_id: UUID) -> Optional[Job]:
    """
    Get a job by ID.

    Args:
        db: Database session
        job_id: Job ID

    Returns:
        Optional[Job]: Job if found, None otherwise
    """
    result = await db.execute(
        select(Job).where(Job.id == job_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_job_or_404(db: AsyncSession, job_id: UUID) -> Job:
    job = await get_job(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    return job


async def list_jobs(
    db: AsyncSession,
    offset: int = 0,
    limit: int = 10,
    title: Optional[str] = None,
    location: Optional[str] = None,
    employment_type: Optional[str] = None,
    experience_level: Optional[str] = None,
) -> Tuple[List[Job], int]:
    """
    Active jobs, newest first, narrowed by the given filters.

    ``title`` and ``location`` match case-insensitive substrings; the enum
    filters match exactly.

    Returns:
        Tuple of (jobs on this page, total matching jobs)
    """
    conditions = [Job.active == True]
    if title:
        conditions.append(Job.title.ilike(f"%{title}%"))
    if location:
        conditions.append(Job.location.ilike(f"%{location}%"))
    if employment_type:
        conditions.append(Job.employment_type == employment_type)
    if experience_level:
        conditions.append(Job.experience_level == experience_level)

    total = await db.scalar(select(func.count(Job.id)).where(*conditions))
    result = await db.execute(
        select(Job)
        .where(*conditions)
        .order_by(Job.created_at.desc(), Job.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0


async def create_job(db: AsyncSession, caller_id: UUID, job_in: JobCreate) -> Job:
    """Post a job with the caller as the company."""
    data = job_in.model_dump(mode="json", exclude={"expires_at"})
    job = Job(company_id=caller_id, expires_at=job_in.expires_at, applicants=[], **data)
    db.add(job)
    await db.flush()
    logger.info(f"[JOBS] User {caller_id} posted job {job.id}: {job.title}")
    return await get_job_or_404(db, job.id)


async def update_job(db: AsyncSession, caller_id: UUID, job_id: UUID, job_in: JobUpdate) -> Job:
    """
    Raises:
        NotFoundError: If the job does not exist
        UnauthorizedError: If the caller does not own the job
    """
    job = await get_job_or_404(db, job_id)
    ensure_owner(job.company_id, caller_id, "update this job")

    changes = job_in.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None:
            continue
        if field == "salary":
            value = job_in.salary.model_dump(mode="json")
        setattr(job, field, value)

    await db.flush()
    logger.info(f"[JOBS] Job {job_id} updated: {sorted(changes)}")
    return await get_job_or_404(db, job_id)


async def delete_job(db: AsyncSession, caller_id: UUID, job_id: UUID) -> None:
    """
    Raises:
        NotFoundError: If the job does not exist
        UnauthorizedError: If the caller does not own the job
    """
    job = await get_job_or_404(db, job_id)
    ensure_owner(job.company_id, caller_id, "delete this job")
    await db.delete(job)
    await db.flush()
    logger.info(f"[JOBS] Job {job_id} deleted by {caller_id}")


async def apply(db: AsyncSession, caller_id: UUID, job_id: UUID) -> Job:
    """
    Add the caller to a job's applicants with status ``applied``.

    Raises:
        NotFoundError: If the job does not exist
        BadRequestError: If the job is no longer active
        ConflictError: If the caller already applied
    """
    job = await get_job_or_404(db, job_id)

    if not job.active:
        raise BadRequestError("This job is no longer active")

    if job.find_applicant(caller_id) is not None:
        logger.warning(f"[JOBS] User {caller_id} already applied to {job_id}")
        raise ConflictError("You have already applied to this job")

    entry = {"user": str(caller_id), "status": "applied", "applied_at": utcnow().isoformat()}
    job.applicants = [*(job.applicants or []), entry]
    await db.flush()
    logger.info(f"[JOBS] User {caller_id} applied to {job_id}")
    return job


async def list_user_applications(db: AsyncSession, caller_id: UUID, user_id: UUID) -> List[Dict[str, Any]]:
    """
    The caller's own applications, one per job.

    Raises:
        UnauthorizedError: If ``user_id`` is not the caller

    Returns:
        List of ``{"job", "status", "applied_at"}``; only the caller's entry
        of each job is exposed
    """
    ensure_owner(user_id, caller_id, "access these applications")

    # Narrow in SQL on the serialized list, then match entries exactly
    result = await db.execute(
        select(Job)
        .where(cast(Job.applicants, String).like(f'%{user_id}%'))
        .order_by(Job.created_at.desc(), Job.id.desc())
    )

    applications = []
    for job in result.scalars().all():
        entry = job.find_applicant(user_id)
        if entry is None:
            continue
        applications.append({
            "job": job,
            "status": entry["status"],
            "applied_at": entry["applied_at"],
        })
    return applications


async def get_applicants(db: AsyncSession, caller_id: UUID, job_id: UUID) -> List[Dict[str, Any]]:
    """
    Applicant entries of a job, for its owner.

    Raises:
        NotFoundError: If the job does not exist
        UnauthorizedError: If the caller does not own the job
    """
    job = await get_job_or_404(db, job_id)
    ensure_owner(job.company_id, caller_id, "view applicants for this job")
    return list(job.applicants or [])


async def update_applicant_status(
    db: AsyncSession,
    caller_id: UUID,
    job_id: UUID,
    user_id: UUID,
    status: str,
) -> Dict[str, Any]:
    """
    Move one applicant to a new status.

    Raises:
        NotFoundError: If the job does not exist or the user has not applied
        UnauthorizedError: If the caller does not own the job
    """
    job = await get_job_or_404(db, job_id)
    ensure_owner(job.company_id, caller_id, "update applicants for this job")

    if job.find_applicant(user_id) is None:
        raise NotFoundError("Applicant not found")

    applicants = []
    updated = None
    for entry in job.applicants:
        if entry.get("user") == str(user_id):
            entry = {**entry, "status": status}
            updated = entry
        applicants.append(entry)

    job.applicants = applicants
    await db.flush()
    logger.info(f"[JOBS] Job {job_id}: applicant {user_id} -> {status}")
    return updated
