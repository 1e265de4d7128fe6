import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Engine defaults, overridable from the environment or a .env file."""

    # Machining defaults
    STEP_PERCENT = float(os.environ.get('MILLPATH_STEP_PERCENT', 40))
    SAFE_Z = float(os.environ.get('MILLPATH_SAFE_Z', 5.0))
    RETRACT_HEIGHT = float(os.environ.get('MILLPATH_RETRACT_HEIGHT', 1.0))
    ENTRY_ANGLE = float(os.environ.get('MILLPATH_ENTRY_ANGLE', 5.0))

    # Geometry discretisation
    SEGMENT_LENGTH = float(os.environ.get('MILLPATH_SEGMENT_LENGTH', 0.5))
    CONTOUR_TOLERANCE = float(os.environ.get('MILLPATH_CONTOUR_TOLERANCE', 0.001))

    # Output flags
    USE_COMMENTS = _env_bool('MILLPATH_USE_COMMENTS', True)
    ALLOW_ARCS = _env_bool('MILLPATH_ALLOW_ARCS', False)
    USE_PADDED_GCODES = _env_bool('MILLPATH_USE_PADDED_GCODES', False)

    # Operations generated concurrently (1 = sequential)
    MAX_WORKERS = int(os.environ.get('MILLPATH_MAX_WORKERS', 1))
