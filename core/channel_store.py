from typing import Iterable, Optional

from structlog import get_logger

from models.channel_model import ChannelRecord

logger = get_logger(__name__)


class ChannelStore:
    """
    Ordered, in-memory list of channel records.

    Records are replaced whole by id. The store never recomputes derived
    metrics; callers hand it records whose cpa/roas already match their inputs.
    """

    def __init__(self, channels: Iterable[ChannelRecord] = ()):
        self._channels: list[ChannelRecord] = list(channels)

    @property
    def channels(self) -> list[ChannelRecord]:
        return list(self._channels)

    def get(self, channel_id: str) -> Optional[ChannelRecord]:
        return next((c for c in self._channels if c.id == channel_id), None)

    def update_channel(self, updated: ChannelRecord) -> None:
        if self.get(updated.id) is None:
            logger.debug("channel_update_ignored", channel_id=updated.id)
            return

        self._channels = [
            updated if c.id == updated.id else c for c in self._channels
        ]
        logger.info(
            "channel_updated",
            channel_id=updated.id,
            spend=updated.spend,
            conversions=updated.conversions,
            revenue=updated.revenue,
        )

    def __len__(self) -> int:
        return len(self._channels)
