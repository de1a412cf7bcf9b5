"""Driver context wiring configuration into the STARTUP handshake."""

from __future__ import annotations

from .compression import Compressor, compressor_for
from .config import DriverConfig, StartupProfileConfig
from .identity import IdentityProvider
from .options import StartupOptions, StartupOptionsBuilder
from .protocol import Startup

APPLICATION_NAME_KEY = "APPLICATION_NAME"
APPLICATION_VERSION_KEY = "APPLICATION_VERSION"
CLIENT_ID_KEY = "CLIENT_ID"


class DriverContext:
    """Connection-scoped state bound to one resolved profile."""

    def __init__(
        self,
        config: DriverConfig | None = None,
        *,
        profile: str | None = None,
        identity: IdentityProvider | None = None,
    ) -> None:
        self._config = config or DriverConfig()
        self._profile = self._config.resolve_profile(profile)
        self._identity = identity
        self._compressor: Compressor | None = None

    @property
    def profile(self) -> StartupProfileConfig:
        """Profile this context was resolved against."""

        return self._profile

    @property
    def compressor(self) -> Compressor:
        if self._compressor is None:
            self._compressor = compressor_for(self._profile.compression)
        return self._compressor

    def startup_options_builder(self) -> StartupOptionsBuilder:
        """Fresh builder primed with the profile's extra options."""

        builder = StartupOptionsBuilder(self, identity=self._identity)
        builder.with_additional_options(self._profile.options)
        builder.with_additional_options(self._application_options())
        return builder

    def startup_options(self) -> StartupOptions:
        return self.startup_options_builder().build()

    def startup_message(self) -> Startup:
        """STARTUP request for a new connection."""

        return Startup(self.startup_options())

    def _application_options(self) -> dict[str, str]:
        values = {
            APPLICATION_NAME_KEY: self._profile.application_name,
            APPLICATION_VERSION_KEY: self._profile.application_version,
            CLIENT_ID_KEY: self._profile.client_id,
        }
        return {key: value for key, value in values.items() if value}


__all__ = ["APPLICATION_NAME_KEY", "APPLICATION_VERSION_KEY", "CLIENT_ID_KEY", "DriverContext"]
