import sys
import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from studyolle.app import create_app
from studyolle.repositories.account_repository import AccountRepository
from studyolle.services.account_service import create_or_update_account
from studyolle.settings import get_validation_limits

logger = logging.getLogger(__name__)


def reset_password(nickname, password, email=None, app=None):
    """Reset the password of an account, creating the account when an email is given."""
    logger.info(f"Attempting to reset password for account: {nickname}")

    app = app or create_app()
    with app.app_context():
        limits = get_validation_limits()
        if not limits["password_min_length"] <= len(password) <= limits["password_max_length"]:
            logger.error(
                f"Password must be between {limits['password_min_length']} "
                f"and {limits['password_max_length']} characters"
            )
            return False

        account = AccountRepository.find_by_nickname(nickname)
        if account is None and email is None:
            logger.error(f"Account '{nickname}' not found. Pass --email to create it.")
            return False

        try:
            create_or_update_account(nickname, email or account.email, password)
        except SQLAlchemyError as e:
            logger.error(f"Failed to reset password: {e}")
            return False

        logger.info("Password updated successfully.")
        return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Reset account password")
    parser.add_argument("nickname", help="Account nickname")
    parser.add_argument("password", help="New password")
    parser.add_argument("--email", help="Email used when the account has to be created")

    args = parser.parse_args(argv)

    if reset_password(args.nickname, args.password, email=args.email):
        print("SUCCESS")
        return 0
    print("FAILURE")
    return 1


if __name__ == "__main__":
    sys.exit(main())
