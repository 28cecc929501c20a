from app.core.config import settings


def isDebugMode() -> bool:
    return settings.MODE.lower() == "debug"


def isTestMode() -> bool:
    return settings.MODE.lower() == "test"


def database_url() -> str:
    """Database URL for the current mode (external host when debugging locally)."""
    return settings.DATABASE_URL_EXTERNAL if isDebugMode() else settings.DATABASE_URL
