import asyncio
import logging
from dataclasses import dataclass

from dosomething.events.dtos import Delivery
from dosomething.exceptions import DeliveryError
from dosomething.notifications.channels.adapter import NotificationChannelAdapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchReport:
    attempted: int
    failed: int


class NotificationDispatcher:
    """Fans a batch of deliveries out concurrently.

    Every delivery is independent: a failure or a timeout for one guest is
    logged and counted, and never stops the others or reaches the caller.
    """

    def __init__(self, adapter: NotificationChannelAdapter, timeout: float | None = None) -> None:
        self.adapter = adapter
        self.timeout = timeout

    async def deliver_all(self, deliveries: list[Delivery]) -> DispatchReport:
        if not deliveries:
            return DispatchReport(attempted=0, failed=0)
        results = await asyncio.gather(*(self._deliver_one(d) for d in deliveries))
        failed = results.count(False)
        if failed:
            logger.warning("%s of %s deliveries failed", failed, len(deliveries))
        return DispatchReport(attempted=len(deliveries), failed=failed)

    async def _deliver_one(self, delivery: Delivery) -> bool:
        guest_id = delivery.guest.guest_id
        try:
            await asyncio.wait_for(
                self.adapter.send(delivery.guest, delivery.template, delivery.message_type),
                timeout=self.timeout,
            )
        except DeliveryError as e:
            logger.warning("Delivery of %s to %s failed: %s", delivery.message_type, guest_id, e)
            return False
        except asyncio.TimeoutError:
            logger.warning("Delivery of %s to %s timed out", delivery.message_type, guest_id)
            return False
        except Exception:
            logger.exception("Unexpected error delivering %s to %s", delivery.message_type, guest_id)
            return False
        return True
