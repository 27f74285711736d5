"""
Public profile visibility and content.
"""

from skillsync.services.mongo_service import CareerGuidanceRecordService

from conftest import onboard, upload


def make_public(client, headers, is_public=True):
    return client.post("/api/profile/visibility", json={"isPublic": is_public}, headers=headers)


def test_private_profile_is_404(client, ai, auth):
    headers, user_id = auth
    onboard(client, headers)
    ai.reply([{"skillName": "Python"}])
    upload(client, headers)

    assert client.get(f"/api/p/{user_id}").status_code == 404


def test_profile_hidden_again_after_turning_off(client, auth):
    headers, user_id = auth
    onboard(client, headers)

    make_public(client, headers)
    assert client.get(f"/api/p/{user_id}").status_code == 200

    response = make_public(client, headers, False)
    assert response.json() == {"isPublic": False}
    assert client.get(f"/api/p/{user_id}").status_code == 404


def test_unknown_user_is_404(client):
    assert client.get("/api/p/999999").status_code == 404


def test_visibility_requires_onboarding(client, auth):
    headers, _ = auth
    assert make_public(client, headers).status_code == 404


def test_visibility_must_be_boolean(client, auth):
    headers, _ = auth
    onboard(client, headers)
    response = client.post("/api/profile/visibility", json={"isPublic": "yes"}, headers=headers)
    assert response.status_code == 400


def test_public_profile_content(client, ai, auth):
    headers, user_id = auth
    onboard(client, headers, skillGoal="Cloud certification", educationLevel="Undergraduate")
    ai.reply([
        {"skillName": "Python", "category": "Programming"},
        {"skillName": "SQL", "category": "Databases"},
        {"skillName": "Python", "category": "Programming"},
        {"skillName": "Mentoring", "category": "Leadership", "skillType": "soft"},
    ])
    upload(client, headers)
    client.post("/api/courses", json={"name": "AWS Cloud Practitioner", "status": "completed"}, headers=headers)
    client.post("/api/courses", json={"name": "Kubernetes Basics"}, headers=headers)
    CareerGuidanceRecordService().upsert(user_id, "Backend Developer", {
        "readiness_score": 61, "summary": "Getting there.", "strengths": ["Python"],
        "gaps": [], "recommendations": []
    })
    make_public(client, headers)

    profile = client.get(f"/api/p/{user_id}").json()

    assert profile["userId"] == user_id
    assert profile["careerGoal"] == "Backend Developer"
    assert profile["skillGoal"] == "Cloud certification"
    assert profile["educationLevel"] == "Undergraduate"
    assert profile["skillCounts"] == {"technical": 3, "soft": 1, "transferable": 0}
    assert profile["skillsByType"]["technical"] == {"Programming": ["Python"], "Databases": ["SQL"]}
    assert profile["skillsByType"]["soft"] == {"Leadership": ["Mentoring"]}
    assert profile["readinessScore"] == 61
    assert profile["guidanceSummary"] == "Getting there."
    assert profile["strengths"] == ["Python"]
    assert profile["completedCourses"] == ["AWS Cloud Practitioner"]
