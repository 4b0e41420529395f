"""Queue type enumeration."""
from enum import Enum


class QueueType(Enum):
    """Match queues the pipeline aggregates.

    Provides:
    - queue_id: numeric queue id found in match-v5 ``info.queueId``
    - queue_name: human-readable name
    - is_ranked / is_casual: which output artifact the queue feeds
    """

    RANKED_SOLO_5x5 = 420  # Solo/Duo Queue
    NORMAL_DRAFT = 400     # Draft Pick
    NORMAL_BLIND = 430     # Blind Pick

    @property
    def queue_id(self) -> int:
        """Get queue ID for API calls."""
        return self.value

    @property
    def queue_name(self) -> str:
        """Get human-readable queue name."""
        names = {
            420: "Ranked Solo/Duo",
            400: "Normal Draft",
            430: "Normal Blind",
        }
        return names[self.value]

    @property
    def is_ranked(self) -> bool:
        return self is QueueType.RANKED_SOLO_5x5

    @property
    def is_casual(self) -> bool:
        return not self.is_ranked

    @classmethod
    def ranked_queues(cls) -> list['QueueType']:
        return [cls.RANKED_SOLO_5x5]

    @classmethod
    def casual_queues(cls) -> list['QueueType']:
        return [cls.NORMAL_DRAFT, cls.NORMAL_BLIND]

    @classmethod
    def is_tracked(cls, queue_id: int) -> bool:
        """True for every queue whose matches are ingested."""
        return queue_id in {q.value for q in cls}
