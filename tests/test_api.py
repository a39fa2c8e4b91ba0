# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest
from datetime import date

from fastapi.testclient import TestClient

from dietplanner.main import create_app
from dietplanner.notifications import SendResult

CLIENTS = {
    "c1": {
        "name": "Zeynep",
        "gender": "female",
        "birthDate": "1988-09-12",
        "height": 160,
        "startingWeight": 50,
        "activityLevel": "sedentary",
        "dietaryRestrictions": "lactose",
    },
}


class RecordingNotifier:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.sent = []

    def send(self, recipient: str, text: str) -> SendResult:
        self.sent.append((recipient, text))
        return SendResult(ok=self.ok, error=None if self.ok else "blocked")


class TestPlansApi(unittest.TestCase):
    def setUp(self) -> None:
        self.notifier = RecordingNotifier()
        app = create_app(
            fetch_client=CLIENTS.get,
            generate_text=None,
            notifier=self.notifier,
            clock=lambda: date(2024, 6, 1),
        )
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()

    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok", "ai_enabled": False})

    def test_generate_fallback_plan(self) -> None:
        resp = self.client.post("/api/plans/generate/c1")
        self.assertEqual(resp.status_code, 200)
        payload = resp.json()
        self.assertEqual(payload["client_id"], "c1")
        self.assertEqual(payload["source"], "fallback")
        plan = payload["plan"]
        self.assertEqual(plan["name"], "maintenance plan (lactose-free) - Zeynep")
        self.assertEqual(
            [m["name"] for m in plan["meals"]],
            ["Breakfast", "Lunch", "Dinner", "Snack1", "Snack2", "Snack"],
        )
        self.assertIn("\"normal\" band", plan["description"])
        self.assertEqual(self.notifier.sent, [])

    def test_unknown_client_is_404(self) -> None:
        resp = self.client.post("/api/plans/generate/nobody")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Client not found")

    def test_notify_sends_summary(self) -> None:
        resp = self.client.post("/api/plans/generate/c1?notify=true")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(self.notifier.sent), 1)
        recipient, text = self.notifier.sent[0]
        self.assertEqual(recipient, "c1")
        self.assertIn(str(resp.json()["plan"]["nutrition_target"]["daily_calories"]), text)

    def test_failed_notification_does_not_fail_request(self) -> None:
        self.notifier.ok = False
        resp = self.client.post("/api/plans/generate/c1?notify=true")
        self.assertEqual(resp.status_code, 200)

    def test_external_plan_is_returned(self) -> None:
        plan = {
            "name": "Model plan",
            "description": "From the model.",
            "nutrition_target": {
                "daily_calories": 1800,
                "macros": {"protein_grams": 120, "carb_grams": 200, "fat_grams": 60},
            },
            "meals": [{"name": "Lunch", "foods": [{"name": "Soup", "amount": "1 bowl", "calories": 150}]}],
        }

        async def generate_text(prompt: str) -> str:
            return json.dumps(plan)

        app = create_app(fetch_client=CLIENTS.get, generate_text=generate_text, clock=lambda: date(2024, 6, 1))
        with TestClient(app) as client:
            resp = client.post("/api/plans/generate/c1")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["source"], "external")
        self.assertEqual(resp.json()["plan"], plan)


if __name__ == "__main__":
    unittest.main()
