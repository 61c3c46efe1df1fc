"""
Settings Routes - profile, password and tag preferences of the logged-in account

The authenticated account is resolved here at the boundary (Flask-Login) and
handed explicitly to the service functions.
"""

import json
import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from studyolle.api_responses import handle_api_errors, success_response, validation_error_response
from studyolle.constants import PASSWORD_VIEW, PROFILE_VIEW, SETTINGS_ROOT, TAGS_VIEW
from studyolle.forms import PasswordForm, ProfileForm, TagForm
from studyolle.repositories.tag_repository import TagRepository
from studyolle.services import account_service
from studyolle.validation import validate_password, validate_profile, validate_tag

logger = logging.getLogger("main")

settings_bp = Blueprint("settings", __name__, url_prefix=SETTINGS_ROOT)


def _account():
    # current_user is a proxy, the services need the mapped instance
    return current_user._get_current_object()


@settings_bp.route("/profile")
@login_required
def update_profile_form():
    account = _account()
    return render_template(PROFILE_VIEW, account=account, profile=ProfileForm.from_account(account), errors=None)


@settings_bp.post("/profile")
@login_required
def update_profile():
    account = _account()
    profile = ProfileForm.from_request(request.form)

    result = validate_profile(profile)
    if not result.success:
        logger.warning(f"Rejected profile update for {account.nickname}: {result.errors}")
        return render_template(PROFILE_VIEW, account=account, profile=profile, errors=result)

    account_service.update_profile(account, profile)
    flash("Profile updated.", "message")
    return redirect(url_for("settings.update_profile_form"))


@settings_bp.route("/password")
@login_required
def update_password_form():
    return render_template(PASSWORD_VIEW, account=_account(), password_form=PasswordForm(), errors=None)


@settings_bp.post("/password")
@login_required
def update_password():
    account = _account()
    password_form = PasswordForm.from_request(request.form)

    result = validate_password(password_form)
    if not result.success:
        logger.warning(f"Rejected password change for {account.nickname}: {result.errors}")
        # submitted passwords are never echoed back
        return render_template(PASSWORD_VIEW, account=account, password_form=PasswordForm(), errors=result)

    account_service.update_password(account, password_form.new_password)
    flash("Password changed.", "message")
    return redirect(url_for("settings.update_password_form"))


@settings_bp.route("/tags")
@login_required
def update_tags_form():
    account = _account()
    whitelist = TagRepository.get_all_titles()
    return render_template(
        TAGS_VIEW,
        account=account,
        tags=account_service.get_tags(account),
        whitelist=json.dumps(whitelist, ensure_ascii=False),
    )


@settings_bp.route("/tags/list")
@login_required
@handle_api_errors
def list_tags():
    account = _account()
    return success_response(
        data={"tags": account_service.get_tags(account), "whitelist": TagRepository.get_all_titles()}
    )


@settings_bp.post("/tags/add")
@login_required
@handle_api_errors
def add_tag():
    account = _account()
    tag_form = TagForm.from_request(request.get_json(silent=True))

    result = validate_tag(tag_form)
    if not result.success:
        return validation_error_response(result)

    account_service.add_tag(account, tag_form.tag_title)
    return success_response()


@settings_bp.post("/tags/remove")
@login_required
@handle_api_errors
def remove_tag():
    account = _account()
    tag_form = TagForm.from_request(request.get_json(silent=True))

    # a blank title names no tag, so there is nothing to remove
    account_service.remove_tag(account, tag_form.tag_title)
    return success_response()
