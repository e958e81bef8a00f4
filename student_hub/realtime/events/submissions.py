from __future__ import annotations

import logging

from student_hub.realtime.bus import ADMIN_TOPIC
from student_hub.realtime.bus import bus
from student_hub.realtime.bus import student_topic

logger = logging.getLogger(__name__)


def publish_submission_changed(sid: str) -> None:
    """Wake the owner's streams and every admin pending-documents stream."""

    woken = bus.publish(student_topic(sid), ADMIN_TOPIC)
    logger.debug("Change for sid=%s woke %d stream(s)", sid, woken)


def publish_academics_changed(sid: str) -> None:
    woken = bus.publish(student_topic(sid))
    logger.debug("Academic change for sid=%s woke %d stream(s)", sid, woken)
