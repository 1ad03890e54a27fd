"""Single-document endpoints: personal details and education."""
from httpx import AsyncClient


class TestPersonalDetails:
    async def test_empty_profile_is_empty_object(self, client: AsyncClient):
        response = await client.get("/api/user")
        assert response.status_code == 200
        assert response.json() == {}

    async def test_update_creates_then_patches(self, client: AsyncClient):
        created = await client.post(
            "/api/user/update",
            json={"name": "Jane Doe", "role": "Engineer", "githubUrl": "https://github.com/jane"},
        )
        assert created.status_code == 200
        assert created.json()["githubUrl"] == "https://github.com/jane"

        await client.post("/api/user/update", json={"role": "Staff Engineer"})

        data = (await client.get("/api/user")).json()
        assert data["id"] == created.json()["id"]
        assert data["name"] == "Jane Doe"
        assert data["role"] == "Staff Engineer"


class TestEducation:
    async def test_default_when_missing(self, client: AsyncClient):
        response = await client.get("/api/education")
        assert response.status_code == 200
        data = response.json()
        assert data["coreObjective"] == ""
        assert data["academic"] == []

    async def test_upsert(self, client: AsyncClient):
        academic = [{"institution": "State University", "degree": "B.Tech", "year": "2022"}]
        response = await client.post(
            "/api/update/education",
            json={"coreObjective": "Build useful things", "academic": academic},
        )
        assert response.status_code == 200

        data = (await client.get("/api/education")).json()
        assert data["coreObjective"] == "Build useful things"
        assert data["academic"] == academic
