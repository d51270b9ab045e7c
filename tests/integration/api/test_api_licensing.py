"""
Integration tests for licensing API endpoints.
"""
import pytest
from django.urls import reverse


def _auth(account):
    return {"HTTP_X_ACCOUNT_ID": str(account.id)}


@pytest.mark.django_db
@pytest.mark.integration
class TestLicensingAPI:
    """Integration tests for the license workflow endpoints."""

    def _apply(self, api_client, applicant, terms):
        return api_client.post(
            reverse("licenses"),
            {
                "ip_asset_id": str(terms.ip_asset_id),
                "license_terms_id": str(terms.id),
                "application_data": {"message": "Limited print run", "intended_use": "posters"},
            },
            format="json",
            **_auth(applicant),
        )

    def test_apply_and_approve(self, api_client, terms, licensee, creator):
        applied = self._apply(api_client, licensee, terms)

        assert applied.status_code == 201
        assert applied.json()["status"] == "pending"
        assert applied.json()["application_data"]["message"] == "Limited print run"

        approved = api_client.post(
            reverse("approve-license", kwargs={"application_id": applied.json()["id"]}),
            format="json",
            **_auth(creator),
        )

        assert approved.status_code == 200
        assert approved.json()["status"] == "approved"
        assert approved.json()["approved_by"] == str(creator.id)

    def test_duplicate_application_conflict(self, api_client, terms, licensee):
        self._apply(api_client, licensee, terms)

        response = self._apply(api_client, licensee, terms)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_APPLICATION"

    def test_second_approval_of_exclusive_terms_conflicts(
        self, api_client, make_terms, licensee, other_licensee, creator
    ):
        exclusive = make_terms(max_licenses=1)
        first = self._apply(api_client, licensee, exclusive).json()
        second = self._apply(api_client, other_licensee, exclusive).json()

        ok = api_client.post(reverse("approve-license", kwargs={"application_id": first["id"]}), **_auth(creator))
        conflict = api_client.post(reverse("approve-license", kwargs={"application_id": second["id"]}), **_auth(creator))

        assert ok.status_code == 200
        assert conflict.status_code == 409
        assert conflict.json()["error"]["code"] == "LICENSE_CAPACITY_REACHED"

    def test_auto_approve(self, api_client, make_terms, licensee):
        response = self._apply(api_client, licensee, make_terms(auto_approve=True))

        assert response.status_code == 201
        assert response.json()["status"] == "approved"

    def test_reject_requires_reason(self, api_client, make_license, licensee, creator):
        pending = make_license(licensee, status="pending")

        response = api_client.post(
            reverse("reject-license", kwargs={"application_id": pending.id}),
            {},
            format="json",
            **_auth(creator),
        )

        assert response.status_code == 400

    def test_reject(self, api_client, make_license, licensee, creator):
        pending = make_license(licensee, status="pending")

        response = api_client.post(
            reverse("reject-license", kwargs={"application_id": pending.id}),
            {"reason": "Outside our brand guidelines"},
            format="json",
            **_auth(creator),
        )

        assert response.status_code == 200
        assert response.json()["rejection_reason"] == "Outside our brand guidelines"

    def test_revoke_with_active_product_conflicts(self, api_client, approved_license, active_product, creator):
        response = api_client.post(
            reverse("revoke-license", kwargs={"application_id": approved_license.id}),
            {"reason": "Breach of territory"},
            format="json",
            **_auth(creator),
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ACTIVE_PRODUCTS_EXIST"

    def test_non_owner_cannot_decide(self, api_client, make_license, licensee, other_licensee):
        pending = make_license(licensee, status="pending")

        response = api_client.post(
            reverse("approve-license", kwargs={"application_id": pending.id}), **_auth(other_licensee)
        )

        assert response.status_code == 403

    def test_verify_license(self, api_client, approved_license, make_license, other_licensee, expired_at, licensee):
        expired = make_license(other_licensee, expires_at=expired_at)

        valid = api_client.get(reverse("verify-license", kwargs={"application_id": approved_license.id}), **_auth(licensee))
        lapsed = api_client.get(reverse("verify-license", kwargs={"application_id": expired.id}), **_auth(licensee))

        assert valid.json()["is_valid"] is True
        assert lapsed.json()["is_valid"] is False

    def test_list_by_role(self, api_client, approved_license, licensee, creator):
        mine = api_client.get(reverse("licenses"), {"role": "applicant"}, **_auth(licensee))
        received = api_client.get(reverse("licenses"), {"role": "owner"}, **_auth(creator))
        none = api_client.get(reverse("licenses"), {"role": "applicant"}, **_auth(creator))

        assert [item["id"] for item in mine.json()] == [str(approved_license.id)]
        assert [item["id"] for item in received.json()] == [str(approved_license.id)]
        assert none.json() == []
