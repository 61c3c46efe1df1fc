"""
Repository for Tag database operations
"""

from sqlalchemy.exc import SQLAlchemyError

from studyolle.db import db
from studyolle.models.tag import Tag


class TagRepository:
    """Repository for Tag database operations"""

    @staticmethod
    def get_all():
        """Get all Tag records"""
        return Tag.query.order_by(Tag.title).all()

    @staticmethod
    def get_all_titles():
        """Titles of every known Tag, sorted"""
        return [title for (title,) in db.session.query(Tag.title).order_by(Tag.title).all()]

    @staticmethod
    def find_by_title(title):
        """Get Tag by title"""
        return Tag.query.filter_by(title=title).first()

    @staticmethod
    def create(**kwargs):
        """Create new Tag record"""
        try:
            item = Tag(**kwargs)
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def find_or_add(title):
        """
        Get Tag by title, adding a new one to the session if absent.
        The caller owns the commit.
        """
        tag = Tag.query.filter_by(title=title).first()
        if tag is None:
            tag = Tag(title=title)
            db.session.add(tag)
            db.session.flush()
        return tag

    @staticmethod
    def count():
        """Count total Tag records"""
        return Tag.query.count()
