import os


def use_default_settings() -> None:
    """Point DJANGO_SETTINGS_MODULE at local or production settings.

    An explicit DJANGO_SETTINGS_MODULE always wins; otherwise ``BUILD_ENV=local``
    picks the development settings and anything else picks production.
    """
    if "DJANGO_SETTINGS_MODULE" in os.environ:
        return
    build_env = os.environ.get("BUILD_ENV", "production").lower()
    module = "local" if build_env == "local" else "production"
    os.environ["DJANGO_SETTINGS_MODULE"] = f"config.settings.{module}"
