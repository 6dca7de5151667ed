from dataclasses import dataclass

from core.config import settings
from services.api_key import normalize_api_key


@dataclass(frozen=True)
class RelayConfig:
    """
    Where Takealot calls go: every request is sent to <proxy_url><base_url>/<path>,
    and the relay wants its own key in `x-cors-api-key`.
    """

    base_url: str
    proxy_url: str = ""
    relay_key: str = ""

    @classmethod
    def from_settings(cls) -> "RelayConfig":
        return cls(
            base_url=settings.TAKEALOT_BASE_URL,
            proxy_url=settings.CORS_PROXY_URL,
            relay_key=settings.CORS_API_KEY,
        )

    def url(self, path: str) -> str:
        target = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        if not self.proxy_url:
            return target
        return f"{self.proxy_url.rstrip('/')}/{target}"


def api_headers(api_key: str, relay_key: str) -> dict[str, str]:
    return {
        "Authorization": normalize_api_key(api_key),
        "Accept": "*/*",
        "Content-Type": "application/json",
        "X-Requested-With": "XMLHttpRequest",
        "x-cors-api-key": relay_key,
    }


def upload_headers(api_key: str, relay_key: str) -> dict[str, str]:
    # no Content-Type: httpx sets the multipart boundary itself
    return {
        "Authorization": normalize_api_key(api_key),
        "Accept": "application/json, text/plain, */*",
        "x-cors-api-key": relay_key,
    }
