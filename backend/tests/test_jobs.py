import pytest

MISSING_ID = "00000000-0000-0000-0000-000000000000"


def job_payload(**overrides):
    payload = {
        "title": "Backend Engineer",
        "description": "Build APIs",
        "location": "Berlin",
        "employment_type": "Full-time",
        "experience_level": "Mid-Senior level",
        "skills": ["python", "sql"],
        "salary": {"min": 60000, "max": 80000, "currency": "EUR"},
        "expires_at": "2030-01-01T00:00:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def post_job(client):
    async def _post(member, **overrides):
        response = await client.post("/api/jobs", json=job_payload(**overrides), headers=member.headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _post


async def test_create_job(client, make_user, post_job):
    company = await make_user("Acme", headline="Hiring")

    job = await post_job(company)

    assert job["company"]["id"] == company.id
    assert job["active"] is True
    assert job["applicant_count"] == 0
    assert job["salary"] == {"min": 60000, "max": 80000, "currency": "EUR"}
    assert "applicants" not in job


async def test_create_job_rejects_unknown_employment_type(client, make_user):
    company = await make_user("Acme")

    response = await client.post(
        "/api/jobs", json=job_payload(employment_type="Gig"), headers=company.headers
    )

    assert response.status_code == 400


async def test_apply_once(client, make_user, post_job):
    company = await make_user("Acme")
    alice = await make_user("Alice")
    job = await post_job(company)

    response = await client.post(f"/api/jobs/{job['id']}/apply", headers=alice.headers)
    assert response.status_code == 200
    assert response.json()["data"]["applicant_count"] == 1

    response = await client.post(f"/api/jobs/{job['id']}/apply", headers=alice.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "You have already applied to this job"


async def test_cannot_apply_to_inactive_or_missing_job(client, make_user, post_job):
    company = await make_user("Acme")
    alice = await make_user("Alice")
    job = await post_job(company)
    await client.put(f"/api/jobs/{job['id']}", json={"active": False}, headers=company.headers)

    response = await client.post(f"/api/jobs/{job['id']}/apply", headers=alice.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "This job is no longer active"

    response = await client.post(f"/api/jobs/{MISSING_ID}/apply", headers=alice.headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Job not found"


async def test_user_applications_lists_each_job_once(client, make_user, post_job):
    company = await make_user("Acme")
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    first = await post_job(company, title="First")
    second = await post_job(company, title="Second")
    await post_job(company, title="Untouched")

    for job in (first, second):
        await client.post(f"/api/jobs/{job['id']}/apply", headers=alice.headers)
    await client.post(f"/api/jobs/{first['id']}/apply", headers=bob.headers)

    response = await client.get(f"/api/users/{alice.id}/applications", headers=alice.headers)

    body = response.json()
    assert body["count"] == 2
    assert sorted(app["job"]["title"] for app in body["data"]) == ["First", "Second"]
    assert {app["status"] for app in body["data"]} == {"applied"}


async def test_user_applications_private_to_owner(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    response = await client.get(f"/api/users/{alice.id}/applications", headers=bob.headers)

    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized to access these applications"


async def test_applicants_visible_and_updatable_by_owner_only(client, make_user, post_job):
    company = await make_user("Acme")
    alice = await make_user("Alice")
    job = await post_job(company)
    await client.post(f"/api/jobs/{job['id']}/apply", headers=alice.headers)

    response = await client.get(f"/api/jobs/{job['id']}/applicants", headers=alice.headers)
    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized to view applicants for this job"

    response = await client.get(f"/api/jobs/{job['id']}/applicants", headers=company.headers)
    assert response.status_code == 200
    assert [entry["user"] for entry in response.json()["data"]] == [alice.id]

    response = await client.put(
        f"/api/jobs/{job['id']}/applicants/{alice.id}", json={"status": "reviewed"}, headers=alice.headers
    )
    assert response.status_code == 401

    response = await client.put(
        f"/api/jobs/{job['id']}/applicants/{alice.id}", json={"status": "reviewed"}, headers=company.headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "reviewed"

    response = await client.put(
        f"/api/jobs/{job['id']}/applicants/{company.id}", json={"status": "offered"}, headers=company.headers
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Applicant not found"

    response = await client.get(f"/api/users/{alice.id}/applications", headers=alice.headers)
    assert response.json()["data"][0]["status"] == "reviewed"


async def test_only_owner_can_update_or_delete_job(client, make_user, post_job):
    company = await make_user("Acme")
    alice = await make_user("Alice")
    job = await post_job(company)

    response = await client.put(f"/api/jobs/{job['id']}", json={"title": "Mine"}, headers=alice.headers)
    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized to update this job"

    response = await client.delete(f"/api/jobs/{job['id']}", headers=alice.headers)
    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized to delete this job"

    response = await client.put(
        f"/api/jobs/{job['id']}", json={"salary": {"min": 90000, "currency": "USD"}}, headers=company.headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["salary"] == {"min": 90000, "max": None, "currency": "USD"}

    response = await client.delete(f"/api/jobs/{job['id']}", headers=company.headers)
    assert response.status_code == 200
    response = await client.get(f"/api/jobs/{job['id']}", headers=company.headers)
    assert response.status_code == 404


async def test_job_listing_filters_and_hides_inactive(client, make_user, post_job):
    company = await make_user("Acme")
    await post_job(company, title="Senior Python Developer", location="Remote")
    await post_job(company, title="Data Analyst", location="Berlin", employment_type="Contract")
    closed = await post_job(company, title="Python Intern", employment_type="Internship")
    await client.put(f"/api/jobs/{closed['id']}", json={"active": False}, headers=company.headers)

    async def titles(**params):
        response = await client.get("/api/jobs", params=params, headers=company.headers)
        assert response.status_code == 200, response.text
        return [job["title"] for job in response.json()["data"]]

    assert await titles() == ["Data Analyst", "Senior Python Developer"]
    assert await titles(title="python") == ["Senior Python Developer"]
    assert await titles(location="berlin") == ["Data Analyst"]
    assert await titles(employment_type="Contract") == ["Data Analyst"]
    assert await titles(experience_level="Director") == []

    response = await client.get("/api/jobs", params={"limit": 1}, headers=company.headers)
    body = response.json()
    assert body["count"] == 1
    assert body["pagination"] == {"next": {"page": 2, "limit": 1}}


async def test_job_listing_handles_out_of_range_paging(client, make_user, post_job):
    company = await make_user("Acme")
    await post_job(company)

    response = await client.get("/api/jobs", params={"page": 2, "limit": 10**19}, headers=company.headers)
    assert response.status_code == 400

    response = await client.get("/api/jobs", params={"page": 10**19, "limit": 100}, headers=company.headers)
    assert response.status_code == 200
    assert response.json()["data"] == []
