"""
Repository for Account database operations
"""

from sqlalchemy.exc import SQLAlchemyError

from studyolle.db import db
from studyolle.models.account import Account


class AccountRepository:
    """Repository for Account database operations"""

    @staticmethod
    def get_all():
        """Get all Account records"""
        return Account.query.order_by(Account.nickname).all()

    @staticmethod
    def get_by_id(id):
        """Get Account by ID"""
        return db.session.get(Account, id)

    @staticmethod
    def find_by_nickname(nickname):
        """Get Account by nickname"""
        return Account.query.filter_by(nickname=nickname).first()

    @staticmethod
    def find_by_email(email):
        """Get Account by email"""
        return Account.query.filter_by(email=email).first()

    @staticmethod
    def exists_by_nickname(nickname):
        return db.session.query(Account.query.filter_by(nickname=nickname).exists()).scalar()

    @staticmethod
    def exists_by_email(email):
        return db.session.query(Account.query.filter_by(email=email).exists()).scalar()

    @staticmethod
    def save(account):
        """Add or update an Account record"""
        try:
            db.session.add(account)
            db.session.commit()
            db.session.refresh(account)
            return account
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def delete_all():
        """Delete every Account record, returns the number removed"""
        try:
            accounts = Account.query.all()
            for account in accounts:
                db.session.delete(account)
            db.session.commit()
            return len(accounts)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def count():
        """Count total Account records"""
        return Account.query.count()
