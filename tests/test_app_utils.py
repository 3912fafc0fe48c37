import unittest

from flask import Flask

from play2win.app_utils import legacy_endpoint, make_error, make_ok
from play2win.errors import APIError


class TestAppUtils(unittest.TestCase):
    def setUp(self):
        self.app = Flask(__name__)

        @self.app.route("/marked")
        @legacy_endpoint
        def marked():
            return make_ok({"raw": True})

    def test_make_ok_returns_wrapped_payload_by_default(self):
        payload = {"value": 42}

        with self.app.test_request_context("/health"):
            response, status_code = make_ok(payload)

        self.assertEqual(status_code, 200)
        self.assertEqual(response.mimetype, "application/json")
        self.assertEqual(
            response.get_json(),
            {"status": "ok", "message": "success", "data": payload},
        )

    def test_make_ok_unwraps_api_paths(self):
        payload = {"games": []}

        with self.app.test_request_context("/api/comprehensive-data"):
            response, status_code = make_ok(payload)

        self.assertEqual(status_code, 200)
        self.assertEqual(response.get_json(), payload)

    def test_legacy_decorator_unwraps_outside_api_prefix(self):
        with self.app.test_client() as client:
            self.assertEqual(client.get("/marked").get_json(), {"raw": True})

    def test_make_error_returns_wrapped_payload_by_default(self):
        with self.app.test_request_context("/status"):
            response, status_code = make_error(
                "Something went wrong", message="Failure", status_code=503
            )

        self.assertEqual(status_code, 503)
        self.assertEqual(
            response.get_json(),
            {
                "status": "error",
                "message": "Failure",
                "error": "Something went wrong",
            },
        )

    def test_make_error_unwraps_for_api_prefix(self):
        with self.app.test_request_context("/api/researcher"):
            response, status_code = make_error(
                "Query is required", status_code=400, details="send a query"
            )

        self.assertEqual(status_code, 400)
        self.assertEqual(
            response.get_json(),
            {"error": "Query is required", "details": "send a query"},
        )

    def test_make_error_flattens_api_error_on_legacy_routes(self):
        err = APIError("Gemini", "RATE_LIMITED", "Rate Limit Exceeded", "try later")
        with self.app.test_request_context("/api/model-pred"):
            response, status_code = make_error(err, status_code=429)

        self.assertEqual(status_code, 429)
        self.assertEqual(
            response.get_json(),
            {"error": "Rate Limit Exceeded", "details": "try later"},
        )

    def test_make_error_keeps_api_error_dict_when_wrapped(self):
        err = APIError("Gemini", "NETWORK", "Network Error")
        with self.app.test_request_context("/status"):
            response, _ = make_error(err, status_code=500)

        body = response.get_json()
        self.assertEqual(body["status"], "error")
        self.assertEqual(body["error"]["code"], "NETWORK")
        self.assertEqual(body["message"], "Network Error")


if __name__ == "__main__":
    unittest.main()
