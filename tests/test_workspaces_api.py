"""API tests for workspaces and projects."""

import pytest


class TestWorkspaces:
    @pytest.mark.api
    def test_create_and_list(self, client, auth_headers):
        created = client.post("/workspaces", json={"name": "  Client Sites  "}, headers=auth_headers).json()
        assert created["name"] == "Client Sites"
        assert created["slug"] == "client-sites"
        assert created["projectCount"] == 0

        listed = client.get("/workspaces", headers=auth_headers).json()
        assert {w["id"] for w in listed} >= {created["id"]}

    @pytest.mark.api
    def test_name_required(self, client, auth_headers):
        for body in ({}, {"name": "   "}):
            response = client.post("/workspaces", json=body, headers=auth_headers)
            assert response.status_code == 400
            assert response.json()["detail"] == "Name is required"

    @pytest.mark.api
    def test_list_only_shows_own_workspaces(self, client, auth_headers, other_headers, workspace):
        ids = [w["id"] for w in client.get("/workspaces", headers=other_headers).json()]
        assert workspace["id"] not in ids

    @pytest.mark.api
    def test_project_count(self, client, auth_headers, workspace, project):
        listed = client.get("/workspaces", headers=auth_headers).json()
        entry = next(w for w in listed if w["id"] == workspace["id"])
        assert entry["projectCount"] == 1


class TestProjects:
    @pytest.mark.api
    def test_create_derives_slug(self, project, workspace):
        assert project["name"] == "P"
        assert project["slug"] == "p"
        assert project["workspaceId"] == workspace["id"]

    @pytest.mark.api
    def test_slug_fallback_for_non_ascii_names(self, client, auth_headers, workspace):
        created = client.post(
            f"/workspaces/{workspace['id']}/projects", json={"name": "日本"}, headers=auth_headers
        ).json()
        assert created["slug"] == "project"
        other = client.post("/workspaces", json={"name": "日本"}, headers=auth_headers).json()
        assert other["slug"] == "workspace"

    @pytest.mark.api
    def test_list_with_file_count(self, client, auth_headers, workspace, project, create_file):
        create_file("index.html")
        create_file("style.css")
        listed = client.get(f"/workspaces/{workspace['id']}/projects", headers=auth_headers).json()
        assert [(p["id"], p["fileCount"]) for p in listed] == [(project["id"], 2)]

    @pytest.mark.api
    def test_name_required(self, client, auth_headers, workspace):
        response = client.post(f"/workspaces/{workspace['id']}/projects", json={"name": ""}, headers=auth_headers)
        assert response.status_code == 400

    @pytest.mark.api
    def test_foreign_workspace_is_not_found(self, client, other_headers, workspace):
        assert client.get(f"/workspaces/{workspace['id']}/projects", headers=other_headers).status_code == 404
        response = client.post(f"/workspaces/{workspace['id']}/projects", json={"name": "X"}, headers=other_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Workspace not found"

    @pytest.mark.api
    def test_unknown_workspace_is_not_found(self, client, auth_headers):
        assert client.get("/workspaces/nope/projects", headers=auth_headers).status_code == 404
