"""
Model: Account
"""

from flask_login import UserMixin

from studyolle.constants import NICKNAME_MAX_LENGTH
from studyolle.db import db
from studyolle.utils import now_utc

account_tags = db.Table(
    "account_tags",
    db.Column("account_id", db.Integer, db.ForeignKey("account.id", ondelete="CASCADE"), primary_key=True),
    db.Column("tag_id", db.Integer, db.ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
)


class Account(UserMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    nickname = db.Column(db.String(NICKNAME_MAX_LENGTH), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)
    joined_at = db.Column(db.DateTime, default=now_utc)

    # Profile
    bio = db.Column(db.String(255))
    url = db.Column(db.String(255))
    occupation = db.Column(db.String(255))
    location = db.Column(db.String(255))
    profile_image = db.Column(db.Text)

    tags = db.relationship("Tag", secondary=account_tags, collection_class=set, lazy="select")

    def tag_titles(self):
        return sorted(tag.title for tag in self.tags)

    def __repr__(self):
        return f"<Account {self.nickname}>"
