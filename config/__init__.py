import os

DEFAULT_ENVIRONMENT = "development"

# APP_ENV spellings accepted for each settings module.
ENVIRONMENT_ALIASES = {
    "dev": "development",
    "development": "development",
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def resolve_environment(name=None) -> str:
    """Canonical environment name for ``name`` (default: ``$APP_ENV``).

    Unknown names fall back to development.
    """
    raw = os.getenv("APP_ENV", DEFAULT_ENVIRONMENT) if name is None else name
    return ENVIRONMENT_ALIASES.get(str(raw).strip().lower(), DEFAULT_ENVIRONMENT)


def get_settings_module(name=None) -> str:
    return f"{__name__}.{resolve_environment(name)}"
