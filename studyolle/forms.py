"""
Form objects bound from submitted request data.

Request parameter names follow the front-end (camelCase), attributes are
snake_case.
"""

from studyolle.exceptions import ValidationException
from studyolle.utils import blank_to_none


class ProfileForm:
    FIELDS = {
        "bio": "bio",
        "url": "url",
        "occupation": "occupation",
        "location": "location",
        "profile_image": "profileImage",
    }

    def __init__(self, bio=None, url=None, occupation=None, location=None, profile_image=None):
        self.bio = bio
        self.url = url
        self.occupation = occupation
        self.location = location
        self.profile_image = profile_image

    @classmethod
    def from_request(cls, data):
        return cls(**{attr: blank_to_none(data.get(param)) for attr, param in cls.FIELDS.items()})

    @classmethod
    def from_account(cls, account):
        return cls(**{attr: getattr(account, attr) for attr in cls.FIELDS})

    def apply_to(self, account):
        for attr in self.FIELDS:
            setattr(account, attr, getattr(self, attr))


class PasswordForm:
    def __init__(self, new_password=None, new_password_confirm=None):
        self.new_password = new_password
        self.new_password_confirm = new_password_confirm

    @classmethod
    def from_request(cls, data):
        return cls(data.get("newPassword"), data.get("newPasswordConfirm"))


class TagForm:
    def __init__(self, tag_title=None):
        self.tag_title = tag_title

    @classmethod
    def from_request(cls, data):
        if not isinstance(data, dict):
            raise ValidationException("Expected a JSON object with a tagTitle field")
        title = data.get("tagTitle")
        if title is not None and not isinstance(title, str):
            raise ValidationException("tagTitle must be a string")
        return cls(blank_to_none(title, strip=True))
