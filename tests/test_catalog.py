import unittest

from tests.base import ApiTestCase


class CatalogApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()

    def test_service_crud(self):
        for path in ("/api/services", "/api/service-types"):
            with self.subTest(path=path):
                created = self.client.post(
                    path, json={"name": "Fiber", "description": "FTTH"}, headers=self.headers
                )
                self.assertEqual(created.status_code, 201)
                item = created.json()
                self.assertEqual(item["name"], "Fiber")

                listed = self.client.get(path, headers=self.headers).json()
                self.assertEqual([entry["id"] for entry in listed], [item["id"]])

                updated = self.client.put(
                    f"{path}/{item['id']}", json={"name": "Copper"}, headers=self.headers
                )
                self.assertEqual(updated.status_code, 200)
                self.assertEqual(updated.json()["name"], "Copper")
                self.assertEqual(updated.json()["description"], "FTTH")

                deleted = self.client.delete(f"{path}/{item['id']}", headers=self.headers)
                self.assertEqual(deleted.status_code, 204)
                missing = self.client.get(f"{path}/{item['id']}", headers=self.headers)
                self.assertEqual(missing.status_code, 404)

    def test_name_is_required(self):
        response = self.client.post("/api/services", json={"name": "  "}, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Name is required"})

    def test_unknown_entries(self):
        self.assertEqual(
            self.client.put("/api/services/42", json={"name": "x"}, headers=self.headers).json(),
            {"message": "Service not found"},
        )
        response = self.client.delete("/api/service-types/42", headers=self.headers)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Service type not found"})

    def test_deleted_reference_resolves_to_null(self):
        service = self.client.post("/api/services", json={"name": "S1"}, headers=self.headers).json()
        service_type = self.client.post(
            "/api/service-types", json={"name": "T1"}, headers=self.headers
        ).json()
        location = self.client.post(
            "/api/locations",
            json={
                "serviceName": service["id"],
                "serviceType": service_type["id"],
                "latitude": 1.0,
                "longitude": 2.0,
            },
            headers=self.headers,
        ).json()
        self.client.delete(f"/api/services/{service['id']}", headers=self.headers)

        fetched = self.client.get(f"/api/locations/{location['id']}", headers=self.headers).json()
        self.assertIsNone(fetched["serviceName"])
        self.assertEqual(fetched["serviceType"]["name"], "T1")

    def test_non_numeric_id_is_a_bad_request(self):
        response = self.client.get("/api/services/abc", headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertIn("message", response.json())


if __name__ == "__main__":
    unittest.main()
