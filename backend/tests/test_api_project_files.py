"""
ProjectHub Backend — /project_files Endpoint Tests
====================================================

What we test:
    ✅ Unknown sort field → 400 without touching the store
    ✅ Creating nested files and listing a directory
    ✅ ParentDirectory=null lists the project root
    ✅ IsDirectory filter (valid and invalid values)
    ✅ File in a missing project → 400
    ✅ PUT: explicit ParentDirectory null moves to root, omission keeps parent
"""

import pytest
from httpx import ASGITransport, AsyncClient

from projecthub.database import get_db_session


async def create_node(client, project_id, name, is_directory=False, parent=None):
    payload = {"ProjectID": project_id, "FileName": name, "IsDirectory": is_directory}
    if parent is not None:
        payload["ParentDirectory"] = parent
    response = await client.post("/project_files", json=payload)
    assert response.status_code == 201
    return response.json()


class TestSortValidation:

    @pytest.mark.asyncio
    async def test_bogus_sort_never_reaches_the_store(self, mock_db_session):
        from projecthub.main import app

        async def override():
            yield mock_db_session

        app.dependency_overrides[get_db_session] = override
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/project_files", params={"sort": "Bogus"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 400
        assert "FileID, FileName, CreationDate" in response.json()["message"]
        mock_db_session.execute.assert_not_called()


class TestProjectFileTree:

    @pytest.mark.asyncio
    async def test_list_directory_contents(self, test_client, make_user, make_project):
        owner = await make_user()
        project = await make_project(owner.id)
        src = await create_node(test_client, project.id, "src", is_directory=True)
        await create_node(test_client, project.id, "main.py", parent=src["FileID"])
        await create_node(test_client, project.id, "util.py", parent=src["FileID"])
        await create_node(test_client, project.id, "README.md")

        response = await test_client.get(
            "/project_files",
            params={"ProjectID": project.id, "ParentDirectory": src["FileID"], "sort": "FileName"},
        )

        body = response.json()
        assert body["total"] == 2
        assert [f["FileName"] for f in body["data"]] == ["main.py", "util.py"]
        assert all(f["ParentDirectory"] == src["FileID"] for f in body["data"])

    @pytest.mark.asyncio
    async def test_list_project_root(self, test_client, make_user, make_project):
        owner = await make_user()
        project = await make_project(owner.id)
        src = await create_node(test_client, project.id, "src", is_directory=True)
        await create_node(test_client, project.id, "main.py", parent=src["FileID"])
        await create_node(test_client, project.id, "README.md")

        response = await test_client.get(
            "/project_files",
            params={"ProjectID": project.id, "ParentDirectory": "null", "sort": "FileName"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [f["FileName"] for f in body["data"]] == ["README.md", "src"]
        assert "ParentDirectory=null" in body["links"]["self"]

    @pytest.mark.asyncio
    async def test_parent_in_missing_project(self, test_client):
        response = await test_client.post(
            "/project_files",
            json={"ProjectID": 12345, "FileName": "lost.txt", "IsDirectory": False},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_directory_filter(self, test_client, make_user, make_project):
        owner = await make_user()
        project = await make_project(owner.id)
        await create_node(test_client, project.id, "docs", is_directory=True)
        await create_node(test_client, project.id, "setup.cfg")

        response = await test_client.get("/project_files", params={"IsDirectory": "false"})

        assert [f["FileName"] for f in response.json()["data"]] == ["setup.cfg"]

    @pytest.mark.asyncio
    async def test_invalid_directory_filter(self, test_client):
        response = await test_client.get("/project_files", params={"IsDirectory": "sometimes"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_root_nodes_have_null_parent(self, test_client, make_user, make_project):
        owner = await make_user()
        project = await make_project(owner.id)

        node = await create_node(test_client, project.id, "LICENSE")

        assert node["ParentDirectory"] is None
        assert node["CreationDate"]


class TestUpdateProjectFile:

    @pytest.mark.asyncio
    async def test_explicit_null_moves_to_root(self, test_client, make_user, make_project):
        owner = await make_user()
        project = await make_project(owner.id)
        src = await create_node(test_client, project.id, "src", is_directory=True)
        node = await create_node(test_client, project.id, "main.py", parent=src["FileID"])

        response = await test_client.put(
            f"/project_files/{node['FileID']}", json={"ParentDirectory": None}
        )

        assert response.status_code == 200
        assert response.json()["ParentDirectory"] is None

    @pytest.mark.asyncio
    async def test_omitted_parent_is_kept(self, test_client, make_user, make_project):
        owner = await make_user()
        project = await make_project(owner.id)
        src = await create_node(test_client, project.id, "src", is_directory=True)
        node = await create_node(test_client, project.id, "main.py", parent=src["FileID"])

        response = await test_client.put(
            f"/project_files/{node['FileID']}", json={"FileName": "app.py"}
        )

        body = response.json()
        assert body["FileName"] == "app.py"
        assert body["ParentDirectory"] == src["FileID"]

    @pytest.mark.asyncio
    async def test_missing_file(self, test_client):
        response = await test_client.put("/project_files/999", json={"FileName": "x"})

        assert response.status_code == 404
