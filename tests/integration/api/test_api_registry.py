"""
Integration tests for registry API endpoints.
"""
import pytest
from django.urls import reverse

from assets.infrastructure.models import IPAsset as IPAssetModel


def _auth(account):
    return {"HTTP_X_ACCOUNT_ID": str(account.id)}


@pytest.mark.django_db
@pytest.mark.integration
class TestRegistryAPI:
    """Integration tests for asset and terms endpoints."""

    def test_register_asset(self, api_client, creator):
        response = api_client.post(
            reverse("register-asset"),
            {
                "title": "Harbour at Dawn",
                "category": "illustration",
                "tags": ["sea", "ink"],
                "metadata": {"medium": "ink", "year_created": 2024},
            },
            format="json",
            **_auth(creator),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["verification_status"] == "pending"
        assert data["creator_id"] == str(creator.id)
        assert data["metadata"]["medium"] == "ink"
        assert IPAssetModel.objects.filter(id=data["id"]).exists()

    def test_register_validation_error(self, api_client, creator):
        response = api_client.post(reverse("register-asset"), {"category": "illustration"}, format="json", **_auth(creator))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert "title" in response.json()["error"]["details"]

    def test_register_as_buyer_forbidden(self, api_client, buyer):
        response = api_client.post(
            reverse("register-asset"),
            {"title": "Harbour", "category": "illustration"},
            format="json",
            **_auth(buyer),
        )

        assert response.status_code == 403

    def test_suspended_account_forbidden(self, api_client, make_account):
        suspended = make_account("creator", status="suspended")

        response = api_client.post(
            reverse("register-asset"),
            {"title": "Harbour", "category": "illustration"},
            format="json",
            **_auth(suspended),
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "ACCOUNT_INACTIVE"

    def test_moderate_asset(self, api_client, creator, admin_account):
        asset = IPAssetModel.objects.create(creator=creator, title="Harbour", category="illustration")

        response = api_client.post(
            reverse("moderate-asset", kwargs={"asset_id": asset.id}),
            {"decision": "approved"},
            format="json",
            **_auth(admin_account),
        )

        assert response.status_code == 200
        assert response.json()["verification_status"] == "approved"

    def test_get_unknown_asset(self, api_client, creator):
        response = api_client.get(
            reverse("asset-detail", kwargs={"asset_id": "00000000-0000-0000-0000-000000000000"}),
            **_auth(creator),
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "IP_ASSET_NOT_FOUND"

    def test_publish_and_list_terms(self, api_client, approved_asset, creator, licensee):
        url = reverse("asset-terms", kwargs={"asset_id": approved_asset.id})

        created = api_client.post(
            url,
            {"revenue_share_percent": "20.00", "duration": "1 year", "max_licenses": 1},
            format="json",
            **_auth(creator),
        )
        listed = api_client.get(url, **_auth(licensee))

        assert created.status_code == 201
        assert created.json()["revenue_share_percent"] == "20.00"
        assert listed.status_code == 200
        assert [terms["id"] for terms in listed.json()] == [created.json()["id"]]

    def test_publish_out_of_range_share(self, api_client, approved_asset, creator):
        response = api_client.post(
            reverse("asset-terms", kwargs={"asset_id": approved_asset.id}),
            {"revenue_share_percent": "55.00"},
            format="json",
            **_auth(creator),
        )

        assert response.status_code == 400

    def test_update_locked_terms_conflict(self, api_client, terms, make_license, licensee, creator):
        make_license(licensee, status="pending")

        response = api_client.patch(
            reverse("terms-detail", kwargs={"terms_id": terms.id}),
            {"max_licenses": 2},
            format="json",
            **_auth(creator),
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "TERMS_LOCKED"
