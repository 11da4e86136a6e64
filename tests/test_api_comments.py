"""API tests for comments on posts and a user's comment history."""

import unittest

from api_support import API, ApiTestCase

from app.services.policy import DELETE_COMMENT_DENIED, UPDATE_COMMENT_DENIED


class TestPostComments(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.owner, self.headers = self.user_with_token()
        self.post_id = self.create_post(self.owner)

    def test_create_comment(self) -> None:
        resp = self.client.post(
            f"{API}/posts/{self.post_id}/comments",
            json={"comment": "Great read", "user_id": 999, "post_id": 999},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["message"], "Comment added successfully")
        self.assertEqual(body["data"]["comment"], "Great read")
        self.assertEqual(body["data"]["user_id"], self.owner)
        self.assertEqual(body["data"]["post_id"], self.post_id)
        self.assertEqual(body["data"]["user"]["email"], "owner@teamwork.io")

    def test_empty_comment_is_422(self) -> None:
        resp = self.client.post(
            f"{API}/posts/{self.post_id}/comments", json={"comment": ""}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 422)
        self.assertIn("comment", resp.json()["errors"])

    def test_comment_on_unknown_post_is_404(self) -> None:
        resp = self.client.post(
            f"{API}/posts/999/comments", json={"comment": "Hello"}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "No post found with the specified identifier.")

    def test_list_is_latest_first(self) -> None:
        self.create_comment(self.owner, self.post_id, "Older")
        self.create_comment(self.owner, self.post_id, "Newer")
        resp = self.client.get(f"{API}/posts/{self.post_id}/comments", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([c["comment"] for c in resp.json()["data"]], ["Newer", "Older"])

    def test_list_without_comments_returns_empty_list(self) -> None:
        resp = self.client.get(f"{API}/posts/{self.post_id}/comments", headers=self.headers)
        self.assertEqual(resp.json(), {"status": "success", "data": []})

    def test_comment_from_another_post_is_404(self) -> None:
        other_post = self.create_post(self.owner, title="Other")
        comment_id = self.create_comment(self.owner, other_post)
        resp = self.client.get(
            f"{API}/posts/{self.post_id}/comments/{comment_id}", headers=self.headers
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(
            resp.json()["message"], "No comment found with the specified identifier."
        )

    def test_get_single_comment(self) -> None:
        comment_id = self.create_comment(self.owner, self.post_id, "Hello")
        resp = self.client.get(
            f"{API}/posts/{self.post_id}/comments/{comment_id}", headers=self.headers
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["id"], comment_id)


class TestUpdateComment(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.author = self.create_user(email="author@teamwork.io")
        self.post_id = self.create_post(self.author)
        self.comment_id = self.create_comment(self.author, self.post_id, "Original")

    def _url(self) -> str:
        return f"{API}/posts/{self.post_id}/comments/{self.comment_id}"

    def test_author_can_edit(self) -> None:
        headers = self.login("author@teamwork.io")
        resp = self.client.put(self._url(), json={"comment": "Edited"}, headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Comment updated successfully")
        self.assertEqual(self.get_comment(self.comment_id).comment, "Edited")

    def test_other_user_gets_403(self) -> None:
        _, headers = self.user_with_token(email="other@teamwork.io")
        resp = self.client.put(self._url(), json={"comment": "Hacked"}, headers=headers)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], UPDATE_COMMENT_DENIED)
        self.assertEqual(self.get_comment(self.comment_id).comment, "Original")

    def test_admin_can_edit(self) -> None:
        _, headers = self.user_with_token(email="admin@teamwork.io", is_admin=True)
        resp = self.client.put(self._url(), json={"comment": "Moderated"}, headers=headers)
        self.assertEqual(resp.status_code, 200)
        comment = self.get_comment(self.comment_id)
        self.assertEqual(comment.comment, "Moderated")
        self.assertEqual(comment.user_id, self.author)


class TestDeleteComment(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.post_owner = self.create_user(email="postowner@teamwork.io")
        self.author = self.create_user(email="author@teamwork.io")
        self.post_id = self.create_post(self.post_owner)
        self.comment_id = self.create_comment(self.author, self.post_id)

    def _url(self) -> str:
        return f"{API}/posts/{self.post_id}/comments/{self.comment_id}"

    def test_post_owner_can_delete_comment_on_their_post(self) -> None:
        headers = self.login("postowner@teamwork.io")
        resp = self.client.delete(self._url(), headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(), {"status": "success", "message": "Comment deleted successfully"}
        )
        self.assertIsNone(self.get_comment(self.comment_id))

    def test_author_can_delete(self) -> None:
        headers = self.login("author@teamwork.io")
        self.assertEqual(self.client.delete(self._url(), headers=headers).status_code, 200)
        self.assertIsNone(self.get_comment(self.comment_id))

    def test_admin_can_delete_any_comment(self) -> None:
        _, headers = self.user_with_token(email="admin@teamwork.io", is_admin=True)
        resp = self.client.delete(self._url(), headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(self.get_comment(self.comment_id))

    def test_stranger_gets_403(self) -> None:
        _, headers = self.user_with_token(email="stranger@teamwork.io")
        resp = self.client.delete(self._url(), headers=headers)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], DELETE_COMMENT_DENIED)
        self.assertIsNotNone(self.get_comment(self.comment_id))


class TestUserComments(ApiTestCase):
    def test_lists_comments_with_their_post(self) -> None:
        user_id, headers = self.user_with_token()
        post_id = self.create_post(user_id, title="Parent")
        self.create_comment(user_id, post_id, "Mine")
        other = self.create_user(email="other@teamwork.io")
        self.create_comment(other, post_id, "Theirs")

        resp = self.client.get(f"{API}/users/{user_id}/comments", headers=headers)
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]["comment"], "Mine")
        self.assertEqual(data[0]["post"]["title"], "Parent")
        self.assertEqual(data[0]["user"]["id"], user_id)

    def test_unknown_user_is_404(self) -> None:
        _, headers = self.user_with_token()
        resp = self.client.get(f"{API}/users/999/comments", headers=headers)
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()
