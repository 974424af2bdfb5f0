from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    default_locale: str = "vi"
    supported_locales: tuple[str, ...] = ("vi", "en", "ja")
    notification_namespace: str = "notifications"
    notification_codes_prefix: str = "codes"
    notification_single_day_suffix: str = "_SINGLE"
    errors_namespace: str = "errors"
    enums_namespace: str = "enums"
    generic_error_key: str = "generic"
    generic_error_text: str = "An error occurred. Please try again."
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="HR_POLICY_",
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
