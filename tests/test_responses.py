"""Unit tests for app.core.responses and app.services.pagination: envelopes and page metadata."""

import json
import unittest

from app.core.responses import (
    error_body,
    error_response,
    paginated_body,
    success_body,
    success_response,
)
from app.services.pagination import Page


class TestSuccessEnvelope(unittest.TestCase):
    def test_message_and_data(self) -> None:
        body = success_body({"id": 1}, "Done")
        self.assertEqual(body, {"status": "success", "message": "Done", "data": {"id": 1}})

    def test_none_and_empty_dict_omit_data(self) -> None:
        self.assertEqual(success_body(None, "Done"), {"status": "success", "message": "Done"})
        self.assertEqual(success_body({}, "Done"), {"status": "success", "message": "Done"})

    def test_empty_list_is_kept(self) -> None:
        self.assertEqual(success_body([]), {"status": "success", "data": []})

    def test_response_status_code(self) -> None:
        resp = success_response({"id": 1}, "Created", 201)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(json.loads(resp.body)["data"], {"id": 1})


class TestErrorEnvelope(unittest.TestCase):
    def test_errors_omitted_when_empty(self) -> None:
        self.assertEqual(error_body("Nope."), {"status": "error", "message": "Nope."})
        self.assertEqual(error_body("Nope.", {}), {"status": "error", "message": "Nope."})

    def test_errors_included(self) -> None:
        body = error_body("Validation failed.", {"email": ["Taken."]})
        self.assertEqual(body["errors"], {"email": ["Taken."]})

    def test_response_headers(self) -> None:
        resp = error_response("Unauthenticated.", 401, headers={"WWW-Authenticate": "Bearer"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers["www-authenticate"], "Bearer")


class TestPage(unittest.TestCase):
    def test_middle_page(self) -> None:
        page = Page(items=list(range(10)), total=25, per_page=10, current_page=2)
        self.assertEqual(page.last_page, 3)
        self.assertEqual((page.first_item, page.last_item), (11, 20))

    def test_partial_last_page(self) -> None:
        page = Page(items=[1, 2], total=12, per_page=10, current_page=2)
        self.assertEqual(page.last_page, 2)
        self.assertEqual((page.first_item, page.last_item), (11, 12))

    def test_empty(self) -> None:
        page = Page(items=[], total=0, per_page=10, current_page=1)
        self.assertEqual(page.last_page, 1)
        self.assertIsNone(page.first_item)
        self.assertIsNone(page.last_item)

    def test_map_keeps_metadata(self) -> None:
        page = Page(items=[1, 2], total=12, per_page=10, current_page=2).map(str)
        self.assertEqual(page.items, ["1", "2"])
        self.assertEqual((page.total, page.current_page), (12, 2))

    def test_paginated_body(self) -> None:
        body = paginated_body(Page(items=[{"id": 11}], total=11, per_page=10, current_page=2))
        self.assertEqual(body["status"], "success")
        self.assertEqual(body["data"], [{"id": 11}])
        self.assertEqual(
            body["pagination"],
            {"total": 11, "per_page": 10, "current_page": 2, "last_page": 2, "from": 11, "to": 11},
        )


if __name__ == "__main__":
    unittest.main()
