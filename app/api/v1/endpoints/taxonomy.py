from fastapi import APIRouter, Depends, Request

from app.api.deps import get_taxonomy_proxy
from app.services.taxonomy_proxy import TaxonomyProxy

router = APIRouter()


async def _forward(proxy: TaxonomyProxy, path: str, request: Request) -> dict:
    # query string is passed through untouched
    data = await proxy.forward(path, request.query_params)
    return {"status": "success", "data": data}


@router.get("/skills")
async def list_skills(request: Request, proxy: TaxonomyProxy = Depends(get_taxonomy_proxy)):
    return await _forward(proxy, "/skills", request)


@router.get("/skills/autocomplete")
async def skills_autocomplete(request: Request, proxy: TaxonomyProxy = Depends(get_taxonomy_proxy)):
    return await _forward(proxy, "/skills/autocomplete", request)


@router.get("/skills/{skill_id}")
async def read_skill(skill_id: str, request: Request, proxy: TaxonomyProxy = Depends(get_taxonomy_proxy)):
    return await _forward(proxy, f"/skills/{skill_id}", request)


@router.get("/jobs")
async def list_jobs(request: Request, proxy: TaxonomyProxy = Depends(get_taxonomy_proxy)):
    return await _forward(proxy, "/jobs", request)


@router.get("/jobs/autocomplete")
async def jobs_autocomplete(request: Request, proxy: TaxonomyProxy = Depends(get_taxonomy_proxy)):
    return await _forward(proxy, "/jobs/autocomplete", request)


@router.get("/jobs/{job_id}")
async def read_job(job_id: str, request: Request, proxy: TaxonomyProxy = Depends(get_taxonomy_proxy)):
    return await _forward(proxy, f"/jobs/{job_id}", request)
