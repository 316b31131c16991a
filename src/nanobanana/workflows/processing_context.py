from typing import Any

from nanobanana.security.secret_helper import get_secret, get_secret_required


class ProcessingContext:
    """
    The processing context is a tool's interface to its host.

    It carries the calling user, free-form variables and the secrets the host
    resolved for this run. Secret lookups fall back to the local
    configuration when the host did not supply a value.
    """

    def __init__(
        self,
        user_id: str | None = None,
        secrets: dict[str, str] | None = None,
        variables: dict[str, Any] | None = None,
    ):
        self.user_id = user_id or "1"
        self.secrets: dict[str, str] = dict(secrets) if secrets else {}
        self.variables: dict[str, Any] = variables if variables else {}

    async def get_secret(self, key: str) -> str | None:
        return get_secret(key, self.secrets)

    async def get_secret_required(self, key: str) -> str:
        return get_secret_required(key, self.secrets)
