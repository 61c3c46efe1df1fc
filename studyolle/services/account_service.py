"""Account mutations used by the settings pages and the seeding helpers.

Every function that changes state runs inside a single ``transaction()``
so a concurrent reader never sees a half-applied change. Validation is the
caller's job and must happen before these are invoked.
"""

import logging

from werkzeug.security import generate_password_hash

from studyolle.constants import PASSWORD_HASH_METHOD
from studyolle.db import transaction
from studyolle.models.account import Account
from studyolle.repositories.account_repository import AccountRepository
from studyolle.repositories.tag_repository import TagRepository

logger = logging.getLogger("main")


def hash_password(password):
    return generate_password_hash(password, method=PASSWORD_HASH_METHOD)


def create_or_update_account(nickname, email, password):
    """
    Create a new account or reset the email and password of an existing one.
    """
    account = AccountRepository.find_by_nickname(nickname)
    with transaction() as session:
        if account:
            logger.info(f"Updating existing account {nickname}")
            account.email = email
            account.password = hash_password(password)
        else:
            logger.info(f"Creating new account {nickname}")
            account = Account(nickname=nickname, email=email, password=hash_password(password))
            session.add(account)
    return account


def update_profile(account, profile_form):
    with transaction():
        profile_form.apply_to(account)
    logger.info(f"Profile updated for account {account.nickname}")
    return account


def update_password(account, new_password):
    with transaction():
        account.password = hash_password(new_password)
    logger.info(f"Password changed for account {account.nickname}")
    return account


def add_tag(account, title):
    """Attach the tag titled ``title``, creating it if unknown. Idempotent."""
    with transaction():
        tag = TagRepository.find_or_add(title)
        if tag not in account.tags:
            account.tags.add(tag)
            logger.info(f"Tag '{title}' added to account {account.nickname}")
    return tag


def remove_tag(account, title):
    """Detach the tag titled ``title``. Unknown or absent tags are a no-op."""
    tag = TagRepository.find_by_title(title) if title else None
    if tag is None:
        logger.debug(f"Ignoring removal of unknown tag '{title}'")
        return False

    with transaction():
        removed = tag in account.tags
        account.tags.discard(tag)
    if removed:
        logger.info(f"Tag '{title}' removed from account {account.nickname}")
    return removed


def get_tags(account):
    return account.tag_titles()
