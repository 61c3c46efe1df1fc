"""
Validation rules for the settings forms.

Every rule is a pure function taking a form (and the active limits) and
returning a ValidationResult. Errors are dicts in the same shape used by
settings.verify_settings: {"path": <field or None>, "error": <message>}.
A path of None marks a group-level error that is not tied to one field.
"""

from studyolle.settings import get_validation_limits


class ValidationResult:
    def __init__(self, errors=None):
        self.errors = list(errors or [])

    @property
    def success(self):
        return not self.errors

    def reject(self, path, error):
        self.errors.append({"path": path, "error": error})

    def field_errors(self, path):
        return [e["error"] for e in self.errors if e["path"] == path]

    @property
    def global_errors(self):
        return [e["error"] for e in self.errors if e["path"] is None]

    def has_field_errors(self):
        return any(e["path"] is not None for e in self.errors)

    def to_dict(self):
        return {"success": self.success, "errors": list(self.errors)}


def _check_max_length(result, form, field, max_length):
    value = getattr(form, field)
    if value is not None and len(value) > max_length:
        result.reject(field, f"Must be at most {max_length} characters.")


def validate_profile(form, limits=None):
    limits = limits or get_validation_limits()
    result = ValidationResult()

    _check_max_length(result, form, "bio", limits["bio_max_length"])
    for field in ("url", "occupation", "location"):
        _check_max_length(result, form, field, limits["profile_field_max_length"])

    return result


def validate_password(form, limits=None):
    limits = limits or get_validation_limits()
    result = ValidationResult()

    new_password = form.new_password or ""
    min_length = limits["password_min_length"]
    max_length = limits["password_max_length"]
    if not min_length <= len(new_password) <= max_length:
        result.reject("new_password", f"Must be between {min_length} and {max_length} characters.")

    if form.new_password != form.new_password_confirm:
        result.reject(None, "The new passwords do not match.")

    return result


def validate_tag(form):
    result = ValidationResult()
    if not form.tag_title:
        result.reject("tag_title", "Tag title is required.")
    return result
