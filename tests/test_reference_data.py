from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from chamados_core.core.domain.reference_data import (
    PAYMENT_METHOD_LABELS,
    SERVICE_CATEGORIES,
    STATUS_LABELS,
    get_category,
    is_known_category,
)


class ReferenceDataTests(SimpleTestCase):
    def test_nine_categories(self) -> None:
        self.assertEqual(
            list(SERVICE_CATEGORIES),
            ["hydraulic", "electrical", "air-conditioning", "cleaning", "carpentry",
             "painting", "security", "gardening", "other"],
        )
        self.assertEqual(SERVICE_CATEGORIES["air-conditioning"].name, "Ar Condicionado")
        self.assertEqual(SERVICE_CATEGORIES["hydraulic"].icon, "Wrench")

    def test_unknown_category_falls_back_to_other(self) -> None:
        self.assertEqual(get_category("elevator").id, "other")
        self.assertEqual(get_category(None).id, "other")
        self.assertFalse(is_known_category("elevator"))

    def test_labels(self) -> None:
        self.assertEqual(STATUS_LABELS["in-progress"], "Em Andamento")
        self.assertEqual(PAYMENT_METHOD_LABELS["transfer"], "Transferência")


class ReferenceDataEndpointTests(TestCase):
    def test_public_endpoint(self) -> None:
        resp = self.client.get(reverse("reference-data"))
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(len(body["categories"]), 9)
        self.assertIn({"id": "pix", "label": "PIX"}, body["payment_methods"])
        self.assertEqual([s["id"] for s in body["statuses"]], ["pending", "scheduled", "in-progress", "completed"])
