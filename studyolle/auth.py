from flask import Blueprint, render_template, redirect, url_for, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager, login_user, login_required, logout_user, current_user
from werkzeug.security import check_password_hash
import os
import logging

from studyolle.constants import BUILD_VERSION
from studyolle.db import db
from studyolle.models.account import Account
from studyolle.repositories.account_repository import AccountRepository
from studyolle.services.account_service import create_or_update_account
from studyolle.settings import load_settings

# Retrieve main logger
logger = logging.getLogger("main")

auth_blueprint = Blueprint("auth", __name__)

login_manager = LoginManager()
login_manager.login_view = "auth.login"

limiter = Limiter(key_func=get_remote_address, default_limits=[])


@login_manager.user_loader
def load_user(user_id):
    """Load account for Flask-Login"""
    return db.session.get(Account, int(user_id))


def init_account_from_environment(environment_name="STUDYOLLE_ACCOUNT"):
    """
    Seed an account from environment variables so a fresh instance can be used without sign-up
    """
    nickname = os.getenv(environment_name + "_NICKNAME")
    email = os.getenv(environment_name + "_EMAIL")
    password = os.getenv(environment_name + "_PASSWORD")
    if not (nickname and email and password):
        return None

    existing = AccountRepository.find_by_email(email)
    if existing is not None and existing.nickname != nickname:
        logger.error(f"Error creating account {nickname}, email {email} already belongs to {existing.nickname}")
        return None

    logger.info("Initializing an account from environment variables...")
    return create_or_update_account(nickname, email, password)


def init_accounts(app):
    with app.app_context():
        if os.environ.get("STUDYOLLE_ACCOUNT_NICKNAME") is not None:
            init_account_from_environment()


def _login_rate_limit():
    return load_settings()["security"]["login_rate_limit"]


def _safe_next_url(next_url):
    # only follow relative redirects
    if not next_url.startswith("/") or next_url.startswith(("//", "/\\")):
        return url_for("settings.update_profile_form")
    return next_url


@auth_blueprint.route("/login", methods=["GET", "POST"])
@limiter.limit(_login_rate_limit, methods=["POST"])
def login():
    if request.method == "GET":
        next_url = request.args.get("next", "")
        if current_user.is_authenticated:
            return redirect(_safe_next_url(next_url))
        return render_template("login.html", title="Login", next=next_url, build_version=BUILD_VERSION)

    login_name = request.form.get("username", "")
    password = request.form.get("password", "")
    remember = bool(request.form.get("remember"))
    next_url = request.form.get("next", "")

    account = AccountRepository.find_by_email(login_name) or AccountRepository.find_by_nickname(login_name)

    # take the user-supplied password, hash it, and compare it to the stored hash
    if not account or not check_password_hash(account.password, password):
        logger.warning(f"Incorrect login for {login_name}")
        return redirect(url_for("auth.login"))

    logger.info(f"Successful login for account {account.nickname}")
    login_user(account, remember=remember)

    return redirect(_safe_next_url(next_url))


@auth_blueprint.route("/logout")
@login_required
def logout():
    logout_user()
    return redirect(url_for("auth.login"))


def init_auth(app):
    login_manager.init_app(app)
    limiter.init_app(app)
    app.register_blueprint(auth_blueprint)
