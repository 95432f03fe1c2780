"""
End-to-End Portal Flow Tests

Walks the whole portal through the HTTP API:
1. Admin builds the structure (organization, facility, group)
2. Admin enrolls a child and links a parent
3. Admin creates a staff record and assigns the teacher to the group
4. Teacher checks the child in and records a meal
5. Parent reads the day, the health record and the audit trail is written
6. Teacher of another group and an unrelated parent are turned away
"""

from httpx import AsyncClient
from sqlalchemy import select

from kinderportal.core.models import AccessLog, Role


class TestCompleteHappyPath:
    """Structure -> enrollment -> staffing -> daily records -> parent view."""

    async def test_end_to_end_portal_flow(
        self, app, client: AsyncClient, db_session, make_user, login
    ):
        admin = await make_user(Role.ADMIN)
        teacher = await make_user(Role.TEACHER, first_name="Gulnara")
        parent = await make_user(Role.PARENT, first_name="Aliya")
        outsider_parent = await make_user(Role.PARENT)
        other_teacher = await make_user(Role.TEACHER)

        # ===== ADMIN: structure =====
        await login(admin)
        org = (await client.post("/api/organizations", json={"name": "Balapan"})).json()
        facility = (
            await client.post(
                "/api/facilities", json={"organization_id": org["id"], "name": "Balapan Central"}
            )
        ).json()
        sunflowers = (
            await client.post(
                "/api/groups", json={"facility_id": facility["id"], "name": "Sunflowers"}
            )
        ).json()
        bees = (
            await client.post("/api/groups", json={"facility_id": facility["id"], "name": "Bees"})
        ).json()

        # ===== ADMIN: enrollment =====
        response = await client.post(
            "/api/children/",
            json={
                "group_id": sunflowers["id"],
                "first_name": "Ainur",
                "last_name": "Seitova",
                "date_of_birth": "2020-03-15",
            },
        )
        assert response.status_code == 201
        child_id = response.json()["id"]

        response = await client.post(
            f"/api/children/{child_id}/parents",
            json={"parent_user_id": str(parent.id), "relationship_type": "mother"},
        )
        assert response.status_code == 201

        # ===== ADMIN: staffing =====
        for user, group in [(teacher, sunflowers), (other_teacher, bees)]:
            staff = (
                await client.post(
                    "/api/staff/",
                    json={"user_id": str(user.id), "facility_id": facility["id"]},
                )
            ).json()
            response = await client.post(
                f"/api/groups/{group['id']}/staff", json={"staff_id": staff["id"]}
            )
            assert response.status_code == 201

        # ===== TEACHER: daily records =====
        await login(teacher)
        response = await client.post(
            f"/api/children/{child_id}/attendance/check-in", json={"time": "2024-11-05T08:00:00Z"}
        )
        assert response.status_code == 200

        response = await client.post(
            f"/api/children/{child_id}/activities",
            json={"activity_type": "meal", "time": "2024-11-05T12:00:00Z", "appetite": 90},
        )
        assert response.status_code == 201

        # ===== PARENT: reads the day =====
        await login(parent)
        children = (await client.get("/api/children/")).json()
        assert [c["id"] for c in children] == [child_id]

        activities = await client.get(f"/api/children/{child_id}/activities?date=2024-11-05")
        assert [a["appetite"] for a in activities.json()] == [90]

        attendance = (await client.get("/api/attendance")).json()
        assert attendance[0]["checked_in_by"] == str(teacher.id)

        health = await client.get(f"/api/children/{child_id}/health")
        assert health.status_code == 200

        await app.state.auditor.drain()
        result = await db_session.execute(
            select(AccessLog.action).where(AccessLog.user_id == parent.id)
        )
        assert result.scalars().all() == ["get_health"]

        # ===== OUTSIDERS =====
        await login(outsider_parent)
        assert (await client.get(f"/api/children/{child_id}/health")).status_code == 403
        assert (await client.get("/api/children/")).json() == []

        await login(other_teacher)
        assert (await client.get(f"/api/children/{child_id}")).status_code == 403
        response = await client.post(
            f"/api/children/{child_id}/activities",
            json={"activity_type": "mood", "time": "2024-11-05T15:00:00Z"},
        )
        assert response.status_code == 403
