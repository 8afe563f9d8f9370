from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PRINTFORGE_")

    app_name: str = "PrintForge"
    debug: bool = False

    # Per-call-site salts for the deterministic choice source.
    # Changing one re-rolls every deck resolved through that call site.
    preference_sequence_salt: int = 0x5E469B12D2AF4B40
    artist_grouper_salt: int = 0x0AFECE4F56362D28
    random_replacer_salt: int = 0xD1CB53F5E85B965B
    random_set_salt: int = 0x0E1412EED3655902


settings = Settings()


# =============================================================================
# BASIC LAND NAMES
# =============================================================================

BASIC_LAND_TYPES: tuple[str, ...] = ("Plains", "Island", "Swamp", "Mountain", "Forest")

SNOW_COVERED_PREFIX = "Snow-Covered "
