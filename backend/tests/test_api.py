import csv
import io
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from backend.app.main import create_app
from seat_booking.config import Settings


def _client(**overrides) -> TestClient:
    settings = Settings(_env_file=None, **{"max_seats": 2, "seats_per_row": 2, "random_seed": 1, **overrides})
    return TestClient(create_app(settings))


class TestSeatBookingAPI(unittest.TestCase):
    def setUp(self):
        self.c = _client()

    def _book(self, name="Alice", phone="111", category="gold"):
        return self.c.post("/reservations", json={"full_name": name, "phone_number": phone, "category": category})

    def test_health(self):
        self.assertEqual(self.c.get("/health").json(), {"ok": True})

    def test_fresh_state(self):
        self.assertEqual(
            self.c.get("/summary").json(),
            {"seats_total": 2, "seats_available": 2, "seats_booked": 0, "by_category": {"gold": 0, "silver": 0}},
        )
        self.assertEqual(self.c.get("/reservations").json(), [])
        seats = self.c.get("/seats").json()
        self.assertEqual([s["seat_number"] for s in seats], [1, 2])
        self.assertTrue(all(s["status"] == "available" and s["occupant"] is None for s in seats))

    def test_book_two_then_sold_out_then_cancel(self):
        r1 = self._book("Alice", "111", "gold")
        self.assertEqual(r1.status_code, 201)
        alice = r1.json()
        self.assertRegex(alice["reservation_id"], r"^RES-[A-Z0-9]{6}$")
        self.assertIn(alice["seat_number"], (1, 2))
        self.assertNotIn("phone_number", alice)

        bob = self._book("Bob", "222", "silver").json()
        self.assertEqual({alice["seat_number"], bob["seat_number"]}, {1, 2})

        r3 = self._book("Cara", "333", "gold")
        self.assertEqual(r3.status_code, 409)
        self.assertEqual(r3.json()["code"], "SoldOut")

        looked = self.c.post(
            "/cancellations/lookup",
            json={"reservation_id": alice["reservation_id"].lower(), "phone_number": "111"},
        )
        self.assertEqual(looked.status_code, 200)
        self.assertEqual(looked.json()["attendee_name"], "Alice")
        # lookup alone changes nothing
        self.assertEqual(self.c.get("/summary").json()["seats_available"], 0)

        done = self.c.post(
            "/cancellations/confirm",
            json={"reservation_id": alice["reservation_id"], "phone_number": " 111 "},
        )
        self.assertEqual(done.status_code, 200)
        self.assertEqual(done.json()["seat_number"], alice["seat_number"])

        summary = self.c.get("/summary").json()
        self.assertEqual(summary["seats_available"], 1)
        self.assertEqual(summary["by_category"], {"gold": 0, "silver": 1})
        self.assertEqual([r["reservation_id"] for r in self.c.get("/reservations").json()], [bob["reservation_id"]])

        again = self.c.post(
            "/cancellations/confirm",
            json={"reservation_id": alice["reservation_id"], "phone_number": "111"},
        )
        self.assertEqual(again.status_code, 404)
        self.assertEqual(again.json()["code"], "NotFound")

    def test_booking_validation(self):
        cases = [
            ({}, "MissingName"),
            ({"full_name": "  ", "phone_number": "1", "category": "gold"}, "MissingName"),
            ({"full_name": "Alice"}, "MissingPhone"),
            ({"full_name": "Alice", "phone_number": "1"}, "MissingCategory"),
            ({"full_name": "Alice", "phone_number": "1", "category": "platinum"}, "MissingCategory"),
            ({"full_name": None, "phone_number": "1", "category": "gold"}, "MissingName"),
            ({"full_name": "Alice", "phone_number": None, "category": "gold"}, "MissingPhone"),
            ({"full_name": "Alice", "phone_number": "1", "category": None}, "MissingCategory"),
        ]
        for body, code in cases:
            with self.subTest(body=body):
                r = self.c.post("/reservations", json=body)
                self.assertEqual(r.status_code, 400)
                self.assertEqual(r.json()["code"], code)
                self.assertTrue(r.json()["detail"])
        self.assertEqual(self.c.get("/summary").json()["seats_available"], 2)

    def test_wrong_phone_is_not_found(self):
        rid = self._book().json()["reservation_id"]
        r = self.c.post("/cancellations/lookup", json={"reservation_id": rid, "phone_number": "112"})
        self.assertEqual(r.status_code, 404)
        r = self.c.post("/cancellations/lookup", json={"reservation_id": rid})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["code"], "MissingFields")
        for body in ({"reservation_id": None, "phone_number": "111"}, {"reservation_id": rid, "phone_number": None}):
            with self.subTest(body=body):
                r = self.c.post("/cancellations/confirm", json=body)
                self.assertEqual(r.status_code, 400)
                self.assertEqual(r.json()["code"], "MissingFields")

    def test_openapi_lists_error_responses(self):
        spec = self.c.get("/openapi.json").json()
        booking = spec["paths"]["/reservations"]["post"]["responses"]
        for status in ("201", "400", "404", "409", "503"):
            self.assertIn(status, booking)

    def test_seat_map_rows(self):
        c = _client(max_seats=5, seats_per_row=2)
        c.post("/reservations", json={"full_name": "Alice", "phone_number": "1", "category": "silver"})
        m = c.get("/seat-map").json()
        self.assertEqual(m["seats_per_row"], 2)
        self.assertEqual([[s["seat_number"] for s in row] for row in m["rows"]], [[1, 2], [3, 4], [5]])
        statuses = [s["status"] for row in m["rows"] for s in row]
        self.assertEqual(statuses.count("silver"), 1)

    def test_reservations_csv(self):
        rid = self._book().json()["reservation_id"]
        r = self.c.get("/reservations.csv")
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.headers["content-type"].startswith("text/csv"))
        rows = list(csv.DictReader(io.StringIO(r.text)))
        self.assertEqual([row["reservation_id"] for row in rows], [rid])

    def test_apps_do_not_share_state(self):
        self._book()
        other = _client()
        self.assertEqual(other.get("/reservations").json(), [])


class TestStaticFallback(unittest.TestCase):
    def test_spa_fallback(self):
        with tempfile.TemporaryDirectory() as d:
            root = Path(d)
            (root / "index.html").write_text("<html>seats</html>", encoding="utf-8")
            (root / "app.js").write_text("console.log('hi')", encoding="utf-8")
            c = _client(static_dir=root)

            self.assertEqual(c.get("/app.js").text, "console.log('hi')")
            self.assertIn("seats", c.get("/attendees").text)
            self.assertIn("seats", c.get("/").text)
            # API routes still win over the catch-all.
            self.assertEqual(c.get("/health").json(), {"ok": True})


if __name__ == "__main__":
    unittest.main()
