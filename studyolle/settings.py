import copy
import logging
import os

import yaml

from studyolle.constants import (
    BIO_MAX_LENGTH,
    CONFIG_FILE,
    DEFAULT_SETTINGS,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    PROFILE_FIELD_MAX_LENGTH,
)

# Retrieve main logger
logger = logging.getLogger("main")


# Cache variable
_cached_settings = None


def load_settings(force=False, config_file=None):
    global _cached_settings

    if _cached_settings and not force:
        return _cached_settings

    config_file = config_file or CONFIG_FILE
    merged_settings = copy.deepcopy(DEFAULT_SETTINGS)

    if os.path.exists(config_file):
        logger.debug(f"Reading configuration file: {config_file}")
        with open(config_file, "r") as yaml_file:
            settings = yaml.safe_load(yaml_file) or {}
        if not isinstance(settings, dict):
            logger.warning(f"Ignoring {config_file}, expected a mapping at the top level")
            settings = {}

        # Deep merge with defaults so new keys are always present
        for section, values in settings.items():
            if isinstance(merged_settings.get(section), dict):
                if not isinstance(values, dict):
                    logger.warning(f"Ignoring settings section {section}, expected a mapping but got {values!r}")
                    continue
                merged_settings[section].update(values)
            else:
                merged_settings[section] = values

        success, errors = verify_settings("validation", merged_settings["validation"])
        if not success:
            for error in errors:
                logger.error(f"Invalid setting {error['path']}: {error['error']}")
            logger.warning("Falling back to default validation limits")
            merged_settings["validation"] = copy.deepcopy(DEFAULT_SETTINGS["validation"])
    else:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        with open(config_file, "w") as yaml_file:
            yaml.dump(merged_settings, yaml_file)

    _cached_settings = merged_settings
    return merged_settings


def verify_settings(section, data):
    success = True
    errors = []
    if section == "validation":
        for key, value in data.items():
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                success = False
                errors.append({"path": f"validation/{key}", "error": f"{value!r} is not a positive integer."})
        if success and data.get("password_min_length", 0) > data.get("password_max_length", 0):
            success = False
            errors.append(
                {"path": "validation/password_min_length", "error": "Minimum length exceeds maximum length."}
            )
    return success, errors


def get_validation_limits():
    """Current validation thresholds, configured or default"""
    limits = load_settings().get("validation", {})
    return {
        "bio_max_length": limits.get("bio_max_length", BIO_MAX_LENGTH),
        "profile_field_max_length": limits.get("profile_field_max_length", PROFILE_FIELD_MAX_LENGTH),
        "password_min_length": limits.get("password_min_length", PASSWORD_MIN_LENGTH),
        "password_max_length": limits.get("password_max_length", PASSWORD_MAX_LENGTH),
    }
