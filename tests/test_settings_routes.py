"""
Tests for the account settings pages: profile, password and tags
"""
import json

from sqlalchemy.exc import OperationalError
from werkzeug.security import check_password_hash

from studyolle.constants import BIO_MAX_LENGTH, PASSWORD_VIEW, PROFILE_VIEW, TAGS_VIEW
from studyolle.db import db
from studyolle.models.tag import Tag
from studyolle.repositories.account_repository import AccountRepository
from studyolle.repositories.tag_repository import TagRepository
from studyolle.services import account_service

from conftest import NICKNAME, PASSWORD

PROFILE_URL = "/settings/profile"
PASSWORD_URL = "/settings/password"
TAGS_URL = "/settings/tags"

LONG_BIO = "길게 소개를 수정하는 경우. " * 10


def reload_account():
    account = AccountRepository.find_by_nickname(NICKNAME)
    db.session.refresh(account)
    return account


class TestAuthenticationRequired:
    """Every settings page is behind login"""

    def test_profile_form_redirects_to_login(self, anonymous_client):
        response = anonymous_client.get(PROFILE_URL)

        assert response.status_code == 302
        assert "/login" in response.location

    def test_tag_add_redirects_to_login(self, anonymous_client):
        response = anonymous_client.post(TAGS_URL + "/add", json={"tagTitle": "newTag"})

        assert response.status_code == 302
        assert TagRepository.find_by_title("newTag") is None


class TestProfile:
    """Tests for the profile form"""

    def test_profile_form(self, client, captured_templates):
        """Profile form exposes the account and a pre-filled profile"""
        response = client.get(PROFILE_URL)

        assert response.status_code == 200
        template, context = captured_templates[-1]
        assert template.name == PROFILE_VIEW
        assert context["account"].nickname == NICKNAME
        assert context["profile"].bio is None

    def test_update_profile(self, client, flashes):
        """Valid bio is stored and the user is redirected with a message"""
        bio = "짧은 소개를 수정하는 경우."

        response = client.post(PROFILE_URL, data={"bio": bio})

        assert response.status_code == 302
        assert response.location.endswith(PROFILE_URL)
        assert ("message", "Profile updated.") in flashes()
        assert reload_account().bio == bio

    def test_update_profile_other_fields(self, client):
        response = client.post(PROFILE_URL, data={
            "bio": "hello",
            "url": "https://studyolle.com",
            "occupation": "developer",
            "location": "Seoul",
            "profileImage": "data:image/png;base64,AAAA",
        })

        assert response.status_code == 302
        account = reload_account()
        assert account.url == "https://studyolle.com"
        assert account.occupation == "developer"
        assert account.location == "Seoul"
        assert account.profile_image == "data:image/png;base64,AAAA"

    def test_bio_at_max_length_is_accepted(self, client):
        bio = "a" * BIO_MAX_LENGTH

        response = client.post(PROFILE_URL, data={"bio": bio})

        assert response.status_code == 302
        assert reload_account().bio == bio

    def test_update_profile_error(self, client, captured_templates, flashes):
        """Too long bio re-renders the form with errors and changes nothing"""
        response = client.post(PROFILE_URL, data={"bio": LONG_BIO})

        assert response.status_code == 200
        template, context = captured_templates[-1]
        assert template.name == PROFILE_VIEW
        assert context["account"] is not None
        assert context["profile"].bio == LONG_BIO
        assert context["errors"].field_errors("bio")
        assert flashes() == []
        assert reload_account().bio is None

    def test_error_keeps_previous_bio(self, client):
        client.post(PROFILE_URL, data={"bio": "before"})

        client.post(PROFILE_URL, data={"bio": LONG_BIO})

        assert reload_account().bio == "before"

    def test_blank_bio_clears_it(self, client):
        client.post(PROFILE_URL, data={"bio": "before"})

        response = client.post(PROFILE_URL, data={"bio": "  "})

        assert response.status_code == 302
        assert reload_account().bio is None


class TestPassword:
    """Tests for the password form"""

    def test_password_form(self, client, captured_templates):
        response = client.get(PASSWORD_URL)

        assert response.status_code == 200
        template, context = captured_templates[-1]
        assert template.name == PASSWORD_VIEW
        assert context["account"].nickname == NICKNAME
        assert context["password_form"].new_password is None

    def test_update_password(self, client, flashes):
        """Matching passwords replace the stored hash"""
        response = client.post(PASSWORD_URL, data={
            "newPassword": "87654321",
            "newPasswordConfirm": "87654321",
        })

        assert response.status_code == 302
        assert response.location.endswith(PASSWORD_URL)
        assert ("message", "Password changed.") in flashes()
        account = reload_account()
        assert check_password_hash(account.password, "87654321")
        assert not check_password_hash(account.password, PASSWORD)

    def test_update_password_same_value(self, client):
        response = client.post(PASSWORD_URL, data={
            "newPassword": "12345678",
            "newPasswordConfirm": "12345678",
        })

        assert response.status_code == 302
        assert check_password_hash(reload_account().password, "12345678")

    def test_update_password_mismatch(self, client, captured_templates):
        """Mismatched confirmation is a group error and the hash is kept"""
        previous_hash = reload_account().password

        response = client.post(PASSWORD_URL, data={
            "newPassword": "12345678",
            "newPasswordConfirm": "11111111",
        })

        assert response.status_code == 200
        template, context = captured_templates[-1]
        assert template.name == PASSWORD_VIEW
        assert context["account"] is not None
        assert context["errors"].global_errors
        assert not context["errors"].has_field_errors()
        assert context["password_form"].new_password is None
        assert context["password_form"].new_password_confirm is None
        assert reload_account().password == previous_hash

    def test_submitted_passwords_are_not_echoed(self, client):
        response = client.post(PASSWORD_URL, data={
            "newPassword": "secret-one",
            "newPasswordConfirm": "secret-two",
        })

        assert b"secret-one" not in response.data
        assert b"secret-two" not in response.data

    def test_update_password_too_short(self, client, captured_templates):
        previous_hash = reload_account().password

        response = client.post(PASSWORD_URL, data={"newPassword": "1234", "newPasswordConfirm": "1234"})

        assert response.status_code == 200
        _, context = captured_templates[-1]
        assert context["errors"].field_errors("new_password")
        assert reload_account().password == previous_hash


class TestTags:
    """Tests for tag preferences"""

    def test_tags_form(self, client, captured_templates, account):
        account_service.add_tag(account, "Spring")
        TagRepository.create(title="Django")

        response = client.get(TAGS_URL)

        assert response.status_code == 200
        template, context = captured_templates[-1]
        assert template.name == TAGS_VIEW
        assert context["account"].nickname == NICKNAME
        assert context["tags"] == ["Spring"]
        assert json.loads(context["whitelist"]) == ["Django", "Spring"]

    def test_add_tag(self, client):
        """Unknown tag is created and attached"""
        response = client.post(TAGS_URL + "/add", json={"tagTitle": "newTag"})

        assert response.status_code == 200
        assert response.get_json()["success"] is True
        new_tag = TagRepository.find_by_title("newTag")
        assert new_tag is not None
        assert new_tag in reload_account().tags

    def test_add_existing_tag_twice(self, client):
        TagRepository.create(title="newTag")

        client.post(TAGS_URL + "/add", json={"tagTitle": "newTag"})
        response = client.post(TAGS_URL + "/add", json={"tagTitle": "newTag"})

        assert response.status_code == 200
        assert TagRepository.count() == 1
        assert reload_account().tag_titles() == ["newTag"]

    def test_add_tag_trims_title(self, client):
        client.post(TAGS_URL + "/add", json={"tagTitle": "  newTag "})

        assert reload_account().tag_titles() == ["newTag"]

        response = client.post(TAGS_URL + "/remove", json={"tagTitle": " newTag  "})

        assert response.status_code == 200
        assert reload_account().tag_titles() == []

    def test_add_long_tag(self, client):
        title = "t" * 120

        response = client.post(TAGS_URL + "/add", json={"tagTitle": title})

        assert response.status_code == 200
        assert reload_account().tag_titles() == [title]

    def test_add_blank_tag(self, client):
        response = client.post(TAGS_URL + "/add", json={"tagTitle": "   "})

        assert response.status_code == 400
        assert response.get_json()["code"] == "VALIDATION_ERROR"
        assert TagRepository.count() == 0

    def test_add_tag_without_json(self, client):
        response = client.post(TAGS_URL + "/add", data="tagTitle=newTag")

        assert response.status_code == 400
        assert TagRepository.count() == 0

    def test_remove_tag(self, client, account):
        new_tag = account_service.add_tag(account, "newTag")
        assert new_tag in account.tags

        response = client.post(TAGS_URL + "/remove", json={"tagTitle": "newTag"})

        assert response.status_code == 200
        assert new_tag not in reload_account().tags
        # the tag itself stays known
        assert TagRepository.find_by_title("newTag") is not None

    def test_remove_unknown_tag(self, client):
        response = client.post(TAGS_URL + "/remove", json={"tagTitle": "ghost"})

        assert response.status_code == 200
        assert TagRepository.find_by_title("ghost") is None

    def test_remove_blank_tag(self, client, account):
        account_service.add_tag(account, "newTag")

        response = client.post(TAGS_URL + "/remove", json={"tagTitle": "   "})

        assert response.status_code == 200
        assert response.get_json()["success"] is True
        assert reload_account().tag_titles() == ["newTag"]

    def test_remove_long_unknown_tag(self, client):
        response = client.post(TAGS_URL + "/remove", json={"tagTitle": "t" * 120})

        assert response.status_code == 200
        assert TagRepository.count() == 0

    def test_remove_tag_without_json(self, client):
        response = client.post(TAGS_URL + "/remove", data="tagTitle=newTag")

        assert response.status_code == 400
        assert response.get_json()["code"] == "VALIDATION_ERROR"

    def test_remove_tag_not_on_account(self, client):
        TagRepository.create(title="other")

        response = client.post(TAGS_URL + "/remove", json={"tagTitle": "other"})

        assert response.status_code == 200
        assert reload_account().tags == set()

    def test_list_tags(self, client, account):
        account_service.add_tag(account, "Python")
        TagRepository.create(title="Go")

        response = client.get(TAGS_URL + "/list")

        data = response.get_json()["data"]
        assert data == {"tags": ["Python"], "whitelist": ["Go", "Python"]}

    def test_tags_are_shared_between_accounts(self, app, client):
        other = account_service.create_or_update_account("other", "other@a.com", PASSWORD)
        account_service.add_tag(other, "shared")

        client.post(TAGS_URL + "/add", json={"tagTitle": "shared"})

        assert db.session.query(Tag).count() == 1
        assert reload_account().tag_titles() == ["shared"]
        assert other.tag_titles() == ["shared"]


class TestPersistenceFailures:
    """Store errors abort the request instead of being reported as validation errors"""

    def test_profile_store_failure(self, client, monkeypatch):
        def fail(account, profile):
            raise OperationalError("UPDATE account", {}, Exception("database is locked"))

        monkeypatch.setattr(account_service, "update_profile", fail)

        response = client.post(PROFILE_URL, data={"bio": "short"})

        assert response.status_code == 500
        assert response.get_json()["code"] == "DATABASE_ERROR"

    def test_tag_store_failure(self, client, monkeypatch):
        def fail(account, title):
            raise OperationalError("INSERT INTO tag", {}, Exception("database is locked"))

        monkeypatch.setattr(account_service, "add_tag", fail)

        response = client.post(TAGS_URL + "/add", json={"tagTitle": "newTag"})

        assert response.status_code == 500
        assert response.get_json()["success"] is False
        assert response.get_json()["code"] == "DATABASE_ERROR"
