class StoryGeoError(Exception):
    """Base error for story geo resolution."""


class InvalidSettingsError(StoryGeoError):
    """Raised when matcher settings are out of range or unparsable."""
