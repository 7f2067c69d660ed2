"""Sample source interfaces for orientation input."""

from __future__ import annotations

from typing import Callable, Optional

from .sample import OrientationSample


class SampleSource:
    """Base interface for orientation sample sources.

    Implementations may be network bridges, file replays or UI sliders.
    """

    # Sensor->display default mapping policy for this source.
    # Valid: identity | swap-xy
    default_display_frame_provider_name: str = "identity"

    def poll(self) -> Optional[OrientationSample]:
        """Return the newest sample since the last poll, or None."""
        raise NotImplementedError

    def set_status(self, text: str) -> None:
        # Optional UI hook.
        pass

    def default_display_frame_provider(self) -> str:
        """Return default sensor->display mapping policy for this source."""
        return self.default_display_frame_provider_name

    def run(self, on_tick: Callable[[], None]) -> None:
        """Run the source's event loop and call on_tick periodically."""
        raise NotImplementedError

    def close(self) -> None:
        pass
