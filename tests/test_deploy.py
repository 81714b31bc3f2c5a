import unittest

from routers.render_router import render_page
from support import ApiTestCase


class DeployTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()
        self.project = self.create_project(self.headers)
        self.deploy_url = f"/api/projects/{self.project['id']}/deploy"

    def test_deploy_is_deterministic_and_idempotent(self):
        first = self.client.post(self.deploy_url, headers=self.headers)
        second = self.client.post(self.deploy_url, headers=self.headers)
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json(), {"deployedUrl": f"/deployed/{self.project['id']}"})
        self.assertEqual(first.json(), second.json())

    def test_deploy_makes_project_public(self):
        self.client.post(self.deploy_url, headers=self.headers)
        resp = self.client.get(f"/api/projects/public/{self.project['id']}")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["isPublic"])
        self.assertEqual(body["deployedUrl"], f"/deployed/{self.project['id']}")

    def test_deploy_missing_project(self):
        resp = self.client.post("/api/projects/nope/deploy", headers=self.headers)
        self.assertEqual(resp.status_code, 404)

    def test_deploy_requires_token(self):
        resp = self.client.post(self.deploy_url)
        self.assertEqual(resp.status_code, 401)


class RenderTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()
        self.project = self.create_project(self.headers)

    def test_undeployed_project_not_rendered(self):
        resp = self.client.get(f"/deployed/{self.project['id']}")
        self.assertEqual(resp.status_code, 404)
        self.assertTrue(resp.headers["content-type"].startswith("text/plain"))
        self.assertEqual(resp.text, "Project not found or not deployed")

    def test_public_but_undeployed_not_rendered(self):
        self.client.put(f"/api/projects/{self.project['id']}", json={"isPublic": True}, headers=self.headers)
        self.assertEqual(self.client.get(f"/deployed/{self.project['id']}").status_code, 404)

    def test_unknown_project_not_rendered(self):
        self.assertEqual(self.client.get("/deployed/nope").status_code, 404)

    def test_rendered_page_embeds_code_verbatim(self):
        html = render_page("T", "<script>alert(1)</script>")
        self.assertIn("<title>T</title>", html)
        self.assertIn("<script>alert(1)</script>", html)
        self.assertTrue(html.startswith("<!DOCTYPE html>"))


class DeploymentScenarioTests(ApiTestCase):
    def test_register_create_edit_deploy_render(self):
        self.assertEqual(self.register("alice", "pw123").status_code, 200)
        token = self.login("alice", "pw123").json()["token"]
        headers = {"Authorization": f"Bearer {token}"}

        created = self.client.post(
            "/api/projects", json={"title": "Hello", "code": "<b>hi</b>"}, headers=headers
        ).json()
        self.assertEqual(len(created["versions"]), 1)

        updated = self.client.put(
            f"/api/projects/{created['id']}", json={"code": "<b>bye</b>"}, headers=headers
        ).json()
        self.assertEqual(len(updated["versions"]), 2)
        self.assertEqual(updated["code"], "<b>bye</b>")

        deployed = self.client.post(f"/api/projects/{created['id']}/deploy", headers=headers).json()
        page = self.client.get(deployed["deployedUrl"])
        self.assertEqual(page.status_code, 200)
        self.assertTrue(page.headers["content-type"].startswith("text/html"))
        self.assertIn("<b>bye</b>", page.text)
        self.assertIn("<title>Hello</title>", page.text)


if __name__ == "__main__":
    unittest.main()
