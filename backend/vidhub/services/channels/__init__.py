from .dto import ChannelProfileOut, SubscriptionOut, VideoOwnerOut, WatchHistoryItemOut
from .service import ChannelService

__all__ = [
    "ChannelProfileOut",
    "ChannelService",
    "SubscriptionOut",
    "VideoOwnerOut",
    "WatchHistoryItemOut",
]
