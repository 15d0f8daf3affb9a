from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AnyHttpUrl

class Settings(BaseSettings):
    endpoint_base_url: AnyHttpUrl = "https://personalwiki.com.de"
    wikis_path: str = "/wikis"

    # Prefix of the link shown to the user after create/update
    public_wiki_base_url: str = "https://personalwiki.com.de/wikis"

    # Success labels and the "Copied!" feedback revert after this many seconds
    label_revert_delay: float = 2.0

    # None means no timeout at all
    request_timeout: Optional[float] = None

    # When False a transport or shape failure leaves the control on its
    # in-flight label; when True it reverts with a generic error message.
    terminal_on_transport_error: bool = False

    model_config = SettingsConfigDict(
        env_prefix="PERSONAL_WIKI_",
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
