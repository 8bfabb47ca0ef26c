import unittest

from cable_network_api.app.core.exceptions import NotFoundError, ValidationError
from cable_network_api.app.services.admin_service import AdminService
from cable_network_api.app.services.geojson_service import (
    GeoJSONService,
    feature_matches,
    prune_features,
)

from tests.base import DatabaseTestCase


def feature(latitude, longitude, name="pole"):
    return {
        "type": "Feature",
        "properties": {"name": name},
        "coordinates": {"latitude": latitude, "longitude": longitude},
    }


class FeatureMatchingTests(unittest.TestCase):
    def test_exact_match_on_both_coordinates(self):
        self.assertTrue(feature_matches(feature(10.5, 20.5), 10.5, 20.5))
        self.assertFalse(feature_matches(feature(10.5, 20.5), 20.5, 10.5))
        self.assertFalse(feature_matches(feature(10.5, 20.5), 10.5, 20.6))

    def test_no_tolerance(self):
        self.assertFalse(feature_matches(feature(10.5, 20.5), 10.5 + 1e-12, 20.5))

    def test_features_without_coordinates_never_match(self):
        self.assertFalse(feature_matches({"type": "Feature"}, 0.0, 0.0))
        self.assertFalse(feature_matches({"coordinates": [0.0, 0.0]}, 0.0, 0.0))
        self.assertFalse(feature_matches("not a feature", 0.0, 0.0))

    def test_booleans_are_not_coordinates(self):
        self.assertFalse(feature_matches(feature(True, True), 1.0, 1.0))
        self.assertFalse(feature_matches(feature(False, 0), 0.0, 0.0))
        self.assertFalse(feature_matches(feature("1.0", 1.0), 1.0, 1.0))
        self.assertTrue(feature_matches(feature(1, 1), 1.0, 1.0))

        geojson = {"type": "FeatureCollection", "features": [feature(True, True)]}
        self.assertEqual(prune_features(geojson, 1.0, 1.0), 0)
        self.assertEqual(geojson["features"], [feature(True, True)])

    def test_prune_removes_all_matches(self):
        geojson = {
            "type": "FeatureCollection",
            "features": [feature(1, 2, "a"), feature(3, 4, "b"), feature(1, 2, "c")],
        }
        removed = prune_features(geojson, 1, 2)
        self.assertEqual(removed, 2)
        self.assertEqual([f["properties"]["name"] for f in geojson["features"]], ["b"])

    def test_prune_without_features_is_noop(self):
        geojson = {"type": "FeatureCollection"}
        self.assertEqual(prune_features(geojson, 1, 2), 0)
        self.assertEqual(geojson, {"type": "FeatureCollection"})


class GeoJSONServiceTests(DatabaseTestCase):
    async def asyncSetUp(self):
        self.admin = await AdminService.create("mapper", "secret")

    async def test_remove_requires_existing_admin(self):
        with self.assertRaises(NotFoundError):
            await GeoJSONService.remove_feature_for_coordinates(999, 1.0, 2.0)

    async def test_remove_requires_geojson(self):
        with self.assertRaises(NotFoundError) as ctx:
            await GeoJSONService.remove_feature_for_coordinates(self.admin["id"], 1.0, 2.0)
        self.assertEqual(ctx.exception.message, "Admin or geojson not found")

    async def test_remove_persists_pruned_collection(self):
        await GeoJSONService.replace_geojson(
            self.admin["id"],
            {"type": "FeatureCollection", "features": [feature(1.0, 2.0), feature(5.0, 6.0)]},
        )
        updated = await GeoJSONService.remove_feature_for_coordinates(self.admin["id"], 1.0, 2.0)
        self.assertEqual(updated["geojson"]["features"], [feature(5.0, 6.0)])

        stored = await AdminService.get_by_id(self.admin["id"])
        self.assertEqual(stored["geojson"]["features"], [feature(5.0, 6.0)])

    async def test_remove_with_no_match_succeeds(self):
        original = {"type": "FeatureCollection", "features": [feature(5.0, 6.0)]}
        await GeoJSONService.replace_geojson(self.admin["id"], original)
        updated = await GeoJSONService.remove_feature_for_coordinates(self.admin["id"], 1.0, 2.0)
        self.assertEqual(updated["geojson"], original)

    async def test_replace_rejects_non_objects(self):
        for value in (None, "geojson", [feature(1, 2)], 42):
            with self.assertRaises(ValidationError):
                await GeoJSONService.replace_geojson(self.admin["id"], value)

    async def test_replace_unknown_admin(self):
        with self.assertRaises(NotFoundError) as ctx:
            await GeoJSONService.replace_geojson(999, {"type": "FeatureCollection", "features": []})
        self.assertEqual(ctx.exception.message, "Admin not found")


if __name__ == "__main__":
    unittest.main()
