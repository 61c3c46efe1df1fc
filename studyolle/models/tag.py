"""
Model: Tag
"""

from studyolle.db import db


class Tag(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), unique=True, nullable=False)

    def __repr__(self):
        return f"<Tag {self.title}>"
