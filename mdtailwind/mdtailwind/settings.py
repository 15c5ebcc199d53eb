from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MDTAILWIND_", case_sensitive=False)

    npm_command: str = "npm"
    postcss_command: list[str] = ["npx", "postcss"]
    node_packages: list[str] = [
        "tailwindcss",
        "postcss",
        "postcss-cli",
        "autoprefixer",
        "@tailwindcss/typography",
    ]
    compile_timeout: float = 300.0
    cdn_url: str = "https://unpkg.com/tailwindcss-jit-cdn"
    css_marker: str = "<!-- css goes here -->"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
