"""Per-invocation CLI state shared by all commands through ``ctx.obj``."""

from __future__ import annotations

from rightst.config import RightstConfig
from rightst.gateway import RemoteScriptGateway


class CliContext:
    """Holds the resolved configuration and, once needed, the gateway.

    The gateway is built lazily so commands that never talk to the remote
    platform (``validate``, ``scaffold``) work without credentials.
    """

    def __init__(
        self,
        config: RightstConfig | None = None,
        gateway: RemoteScriptGateway | None = None,
    ) -> None:
        self.config = config or RightstConfig()
        self.gateway = gateway

    def get_gateway(self) -> RemoteScriptGateway:
        if self.gateway is None:
            from rightst.gateway.http import HttpGateway

            self.gateway = HttpGateway(
                self.config.credentials(), timeout=self.config.request_timeout
            )
        return self.gateway
