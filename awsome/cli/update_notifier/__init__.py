from __future__ import annotations

from awsome.cli.update_notifier.adapters.filesystem_banner_marker import (
    FileSystemBannerMarker,
)
from awsome.cli.update_notifier.adapters.filesystem_update_cache_repository import (
    FileSystemUpdateCacheRepository,
)
from awsome.cli.update_notifier.adapters.unavailable_update_gateway import (
    UnavailableUpdateGateway,
)
from awsome.cli.update_notifier.ports.banner_marker import BannerMarker
from awsome.cli.update_notifier.ports.update_cache_repository import (
    UpdateCache,
    UpdateCacheRepository,
)
from awsome.cli.update_notifier.ports.update_gateway import (
    DEFAULT_GATEWAY_MESSAGES,
    UpdateGateway,
    UpdateGatewayCause,
    UpdateGatewayError,
)
from awsome.cli.update_notifier.update import (
    ForcedCheckResult,
    UpdateApplyResult,
    UpdateChecker,
    UpdateStatus,
)

__all__ = [
    "DEFAULT_GATEWAY_MESSAGES",
    "BannerMarker",
    "FileSystemBannerMarker",
    "FileSystemUpdateCacheRepository",
    "ForcedCheckResult",
    "UnavailableUpdateGateway",
    "UpdateApplyResult",
    "UpdateCache",
    "UpdateCacheRepository",
    "UpdateChecker",
    "UpdateGateway",
    "UpdateGatewayCause",
    "UpdateGatewayError",
    "UpdateStatus",
]
